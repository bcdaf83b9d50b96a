"""
A-Eye Channel Module
Call/response boundary between the UI layer and the model
"""

from .handler import MethodCallHandler
from .messages import (
    METHODS,
    ChannelError,
    ChannelResult,
    MethodCall,
    Request,
    RunInference,
    UnknownMethod,
    parse_call,
)

__all__ = [
    'METHODS',
    'ChannelError',
    'ChannelResult',
    'MethodCall',
    'MethodCallHandler',
    'Request',
    'RunInference',
    'UnknownMethod',
    'parse_call',
]
