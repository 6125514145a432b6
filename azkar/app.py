"""
FastAPI standalone server for development
Serves the store commands over HTTP and change notifications over WebSocket,
so the client can be exercised without the desktop wrapper
"""

import json
from contextlib import asynccontextmanager
from typing import Any, Dict, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from azkar import __version__
from azkar.core.events import register_emit_handler, unregister_emit_handler
from azkar.core.logger import get_logger
from azkar.handlers import register_fastapi_routes

logger = get_logger(__name__)

_subscribers: Set[WebSocket] = set()


async def broadcast_event(event_name: str, payload: Dict[str, Any]) -> None:
    """Emit sink: forward an event to every connected WebSocket"""
    message = json.dumps({"event": event_name, "payload": payload}, ensure_ascii=False)
    for websocket in list(_subscribers):
        try:
            await websocket.send_text(message)
        except (RuntimeError, WebSocketDisconnect):
            logger.debug("Dropping disconnected event subscriber")
            _subscribers.discard(websocket)


@asynccontextmanager
async def lifespan(app: FastAPI):
    register_emit_handler(broadcast_event)
    try:
        yield
    finally:
        unregister_emit_handler(broadcast_event)


app = FastAPI(
    title="Azkar API",
    description="Store commands for the Azkar reminder",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "message": "Azkar API Server", "version": __version__}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.websocket("/api/events/stream")
async def stream_events(websocket: WebSocket) -> None:
    """Push store events to a subscriber until it disconnects"""
    await websocket.accept()
    _subscribers.add(websocket)
    logger.info(f"Event subscriber connected, total: {len(_subscribers)}")
    try:
        while True:
            # Subscribers don't send anything meaningful; reading detects disconnects
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        _subscribers.discard(websocket)
        logger.info(f"Event subscriber disconnected, total: {len(_subscribers)}")


register_fastapi_routes(app, prefix="/api")
