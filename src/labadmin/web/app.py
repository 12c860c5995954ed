"""
Flask application factory for the lab administration web interface.
"""

from pathlib import Path

from flask import Flask, current_app, flash, g

from labadmin.core.config import Config, load_config
from labadmin.core.notify import (
    Notification,
    NotificationHandler,
    create_notifier,
)
from labadmin.core.view import LabAdminView
from labadmin.store.base import LabStore, get_store
from labadmin.web import events


class FlashNotificationHandler(NotificationHandler):
    """Handler that shows notifications as flash toasts on the next page."""

    def send(self, notification: Notification) -> None:
        flash(notification.message, notification.level.value)


def create_app(config: Config | None = None, store: LabStore | None = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Optional Config instance. If None, loads from default location.
        store: Optional lab store. If None, built from config.

    Returns:
        Configured Flask application
    """
    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "templates"),
        static_folder=str(Path(__file__).parent / "static"),
    )

    if config is None:
        config = load_config()

    app.config["LABADMIN_CONFIG"] = config
    app.config["LABADMIN_STORE"] = store or get_store(config)
    app.config["SECRET_KEY"] = config.web.secret_key

    from labadmin.web.api import api_bp
    from labadmin.web.views import views_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(views_bp)

    events.init_socketio(app)

    @app.before_request
    def before_request():
        """Expose store and config for each request."""
        g.store = app.config["LABADMIN_STORE"]
        g.config = app.config["LABADMIN_CONFIG"]

    return app


def build_view() -> LabAdminView:
    """Create an admin view for the current request."""
    store = g.get("store") or current_app.config["LABADMIN_STORE"]
    return LabAdminView(
        store,
        notifier=create_notifier(FlashNotificationHandler()),
        on_change=events.broadcast_labs_changed,
    )
