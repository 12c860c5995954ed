"""
Live refresh events for the lab management screen.

Open admin screens join the /labs Socket.IO namespace and reload when
another client changes a lab.
"""

import logging

from flask import Flask, current_app, has_app_context, request
from flask_socketio import SocketIO

logger = logging.getLogger(__name__)

NAMESPACE = "/labs"


def init_socketio(app: Flask, **kwargs) -> SocketIO:
    """Initialize SocketIO with Flask app.

    The instance is kept in app.extensions["socketio"], so each app
    broadcasts only to its own clients.
    """
    sio = SocketIO(app, **kwargs)
    register_handlers(sio)
    return sio


def get_socketio(app: Flask) -> SocketIO:
    """SocketIO instance attached to app by init_socketio()."""
    return app.extensions["socketio"]


def register_handlers(sio: SocketIO):
    """Register SocketIO event handlers."""

    @sio.on("connect", namespace=NAMESPACE)
    def handle_connect():
        logger.info(f"WebSocket client connected: {request.sid}")

    @sio.on("disconnect", namespace=NAMESPACE)
    def handle_disconnect(*args):
        logger.info(f"WebSocket client disconnected: {request.sid}")


def broadcast_labs_changed() -> None:
    """Tell every admin screen connected to the current app to refetch."""
    if not has_app_context():
        return
    sio = current_app.extensions.get("socketio")
    if sio is None:
        return
    logger.debug("Broadcasting labs_changed")
    sio.emit("labs_changed", {}, namespace=NAMESPACE)
