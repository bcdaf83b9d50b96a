"""
A-Eye Local Channel Server
Exposes the inference channel to the UI process over local HTTP
"""

import logging
import threading
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..bridge import Bridge, get_bridge
from ..core.config import Settings, settings
from ..core.errors import BridgeError, InvalidArguments
from ..channel.messages import ChannelResult, MethodCall

logger = logging.getLogger('aeye.api')


def create_app(config: Optional[Settings] = None, bridge: Optional[Bridge] = None) -> FastAPI:
    """
    Build the server app. The bridge is started once in the lifespan unless
    one is passed in.
    """
    config = config or settings

    # At most one forward pass in flight
    evaluate_lock = threading.Lock()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.bridge = bridge
        app.state.startup_error = None
        if app.state.bridge is None:
            try:
                app.state.bridge = get_bridge(config)
            except BridgeError as e:
                # Reported on every call and on /api/status
                logger.error(f"Bridge failed to start: {e.code}: {e.message}")
                app.state.startup_error = e
        yield

    app = FastAPI(title="A-Eye Edge Bridge", lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def invalid_call(request: Request, exc: RequestValidationError):
        """Malformed call bodies get the channel error envelope"""
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        error = InvalidArguments("Malformed method call", details=problems)
        return JSONResponse(ChannelResult.failure(error).model_dump())

    @app.get("/api/status")
    def get_status(request: Request):
        """API: Get bridge status"""
        bridge = request.app.state.bridge
        if bridge is None:
            error = request.app.state.startup_error
            return JSONResponse({
                "ready": False,
                "channel": config.channel_name,
                "error": error.to_dict() if error else None,
            }, status_code=503)

        info = bridge.describe()
        return JSONResponse({
            "ready": True,
            "channel": bridge.channel_name,
            "model_path": info['model_path'],
            "runtime": info['runtime'],
        })

    @app.post("/channels/{channel:path}")
    def invoke(channel: str, call: MethodCall, request: Request):
        """Invoke a method on the named channel"""
        bridge = request.app.state.bridge

        if channel != config.channel_name:
            return JSONResponse({"error": f"Unknown channel: {channel}"}, status_code=404)

        if bridge is None:
            payload = ChannelResult.failure(request.app.state.startup_error)
            return JSONResponse(payload.model_dump(), status_code=503)

        with evaluate_lock:
            result = bridge.handler.handle_call(call)
        return JSONResponse(result.model_dump())

    return app


app = create_app()


def run_server(config: Optional[Settings] = None):
    """Start the channel server"""
    config = config or settings
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )
