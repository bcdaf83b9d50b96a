"""
Boundary message types for the inference channel.

Incoming calls are parsed into a closed set of request types; anything the
channel does not know becomes UnknownMethod, which is answered with a
not-implemented result rather than an error.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, ValidationError

from ..core.errors import BridgeError, InvalidArguments


class MethodCall(BaseModel):
    """A named call plus its loosely typed argument map"""
    method: str
    arguments: Optional[Dict[str, Any]] = Field(default_factory=dict)


class RunInference(BaseModel):
    kind: Literal['run_inference'] = 'run_inference'
    # Strict: numeric strings and integral floats are rejected
    input: List[Union[StrictInt, StrictFloat]]
    shape: List[StrictInt]


class UnknownMethod(BaseModel):
    kind: Literal['unknown_method'] = 'unknown_method'
    method: str


Request = Union[RunInference, UnknownMethod]

# Wire method name -> request type
METHODS = {
    'runInference': RunInference,
}


def parse_call(call: MethodCall) -> Request:
    request_type = METHODS.get(call.method)
    if request_type is None:
        return UnknownMethod(method=call.method)

    try:
        return request_type.model_validate(call.arguments or {})
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidArguments(
            f"Invalid arguments for '{call.method}'",
            details=problems
        ) from e


class ChannelError(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ChannelResult(BaseModel):
    """What goes back across the boundary: a value, an error, or not-implemented"""
    status: Literal['success', 'error', 'not_implemented']
    result: Optional[float] = None
    error: Optional[ChannelError] = None

    @classmethod
    def success(cls, value: float) -> 'ChannelResult':
        return cls(status='success', result=value)

    @classmethod
    def failure(cls, exc: BridgeError) -> 'ChannelResult':
        return cls(status='error', error=ChannelError(**exc.to_dict()))

    @classmethod
    def not_implemented(cls) -> 'ChannelResult':
        return cls(status='not_implemented')
