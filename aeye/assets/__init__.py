"""
A-Eye Asset Module
Materializes the bundled model onto writable storage
"""

from .materializer import AssetMaterializer

__all__ = ['AssetMaterializer']
