"""
A-Eye API Module
Local HTTP transport for the inference channel
"""

from .server import app, create_app, run_server

__all__ = ['app', 'create_app', 'run_server']
