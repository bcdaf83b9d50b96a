"""
Error taxonomy shared by the materializer, the engine and the channel.

Every error carries a stable ``code`` which the channel reports back to the
UI layer, so a failure is never mistaken for a numeric result.
"""

from typing import Any, Optional


class BridgeError(Exception):
    code = "BRIDGE_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ResourceUnavailable(BridgeError):
    """Bundled asset missing/unreadable, or destination not writable."""
    code = "RESOURCE_UNAVAILABLE"


class LoadFailure(BridgeError):
    """Model file present but not loadable by the runtime."""
    code = "LOAD_FAILURE"


class ShapeMismatch(BridgeError):
    """Input buffer and shape disagree with each other or with the model."""
    code = "SHAPE_MISMATCH"


class InferenceFailure(BridgeError):
    """The runtime faulted during the forward pass."""
    code = "INFERENCE_FAILURE"


class InvalidArguments(BridgeError):
    """A channel call arrived with missing or ill-typed arguments."""
    code = "INVALID_ARGUMENTS"
