"""
A-Eye Method Call Handler
Dispatches parsed channel requests to the loaded model
"""

import logging
import math

from ..core.errors import BridgeError, InferenceFailure
from ..inference.engine import ModelHandle
from .messages import ChannelError, ChannelResult, MethodCall, RunInference, UnknownMethod, parse_call

logger = logging.getLogger('aeye.channel')


class MethodCallHandler:
    """
    Answers channel calls against a single ModelHandle.

    Errors are always returned as error results carrying their code; they
    never turn into a default numeric value.
    """

    def __init__(self, handle: ModelHandle):
        self.handle = handle

    def handle_call(self, call: MethodCall) -> ChannelResult:
        try:
            request = parse_call(call)

            if isinstance(request, RunInference):
                value = self.handle.evaluate(request.input, request.shape)
                if not math.isfinite(value):
                    # NaN and inf have no JSON encoding
                    raise InferenceFailure("Model output is not finite", details={'value': str(value)})
                return ChannelResult.success(value)
            if isinstance(request, UnknownMethod):
                logger.info(f"Method not implemented: {request.method}")
                return ChannelResult.not_implemented()

            raise TypeError(f"Unhandled request type: {type(request).__name__}")

        except BridgeError as e:
            logger.warning(f"{call.method} failed: {e.code}: {e.message}")
            return ChannelResult.failure(e)
        except Exception as e:
            logger.exception(f"Unexpected error handling {call.method}")
            return ChannelResult(
                status='error',
                error=ChannelError(code='INTERNAL_ERROR', message=str(e))
            )
