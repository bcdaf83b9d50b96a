"""
A-Eye Bridge
Process-wide model lifecycle: materialize once, load once, reuse forever
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .assets.materializer import AssetMaterializer
from .channel.handler import MethodCallHandler
from .channel.messages import ChannelResult, MethodCall
from .core.config import Settings, settings
from .inference.engine import InferenceEngine, ModelHandle

logger = logging.getLogger('aeye.bridge')


class Bridge:
    """
    A started bridge: the materialized model path plus its loaded handle.

    Use Bridge.start to build one; there is no way to hold a Bridge whose
    model is not loaded.
    """

    def __init__(self, model_path: Path, handle: ModelHandle, channel_name: str):
        self.model_path = model_path
        self.handle = handle
        self.channel_name = channel_name
        self.handler = MethodCallHandler(handle)

    @classmethod
    def start(cls, config: Optional[Settings] = None) -> 'Bridge':
        """
        Materialize the bundled model and load it.

        Raises ResourceUnavailable or LoadFailure; both leave the feature
        without a model and should be surfaced to the user.
        """
        config = config or settings

        materializer = AssetMaterializer(
            asset_dir=config.asset_dir,
            files_dir=config.files_dir,
            model_file_name=config.model_file_name
        )
        model_path = materializer.ensure_present()

        engine = InferenceEngine(num_threads=config.num_threads)
        handle = engine.load(model_path)

        logger.info(f"Bridge ready on channel {config.channel_name}")
        return cls(model_path, handle, config.channel_name)

    def call(self, method: str, arguments: Optional[Dict[str, Any]] = None) -> ChannelResult:
        return self.handler.handle_call(MethodCall(method=method, arguments=arguments or {}))

    def describe(self) -> Dict[str, Any]:
        return {
            'channel': self.channel_name,
            'model_path': str(self.model_path),
            **self.handle.describe(),
        }


# Singleton instance
_bridge: Optional[Bridge] = None


def get_bridge(config: Optional[Settings] = None) -> Bridge:
    global _bridge
    if _bridge is None:
        _bridge = Bridge.start(config)
    return _bridge


def reset_bridge():
    global _bridge
    _bridge = None
