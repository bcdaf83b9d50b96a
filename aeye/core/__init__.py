from .config import Settings, get_settings, settings, setup_logging
from .errors import (
    BridgeError,
    InferenceFailure,
    InvalidArguments,
    LoadFailure,
    ResourceUnavailable,
    ShapeMismatch,
)

__all__ = [
    'Settings',
    'get_settings',
    'settings',
    'setup_logging',
    'BridgeError',
    'InferenceFailure',
    'InvalidArguments',
    'LoadFailure',
    'ResourceUnavailable',
    'ShapeMismatch',
]
