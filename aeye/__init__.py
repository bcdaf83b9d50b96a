"""
A-Eye Edge
Bridge between the A-Eye UI and the on-device inference runtime
"""

__version__ = "1.0.0"

from .assets import AssetMaterializer
from .bridge import Bridge, get_bridge, reset_bridge
from .inference import InferenceEngine, ModelHandle

__all__ = [
    'AssetMaterializer',
    'Bridge',
    'InferenceEngine',
    'ModelHandle',
    'get_bridge',
    'reset_bridge',
]
