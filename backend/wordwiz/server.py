from __future__ import annotations

import sys
from pathlib import Path

from flask import Flask, send_from_directory
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.oracle import WordOracle
from .game.scheduler import RoundScheduler
from .game.service import RoomDirectory
from .realtime.handlers import register_socketio_handlers
from .realtime.registry import ConnectionRegistry
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp
from .routes.words import bp as words_bp


def _default_async_mode() -> str:
    # Windows and Python >= 3.13 fall back to threading (eventlet issues).
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config_class=Config) -> tuple[Flask, SocketIO]:
    dist_dir = Path(__file__).resolve().parents[2] / "frontend" / "dist"

    static_folder = str(dist_dir) if dist_dir.exists() else None
    static_url_path = "/" if dist_dir.exists() else None

    app = Flask(
        __name__,
        static_folder=static_folder,
        static_url_path=static_url_path,
    )
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=app.config.get("SOCKETIO_ASYNC_MODE") or _default_async_mode(),
    )

    # One directory per app instance; rooms live only as long as the process.
    directory = RoomDirectory.from_config(app.config)
    registry = ConnectionRegistry()
    oracle = WordOracle.from_config(app.config)
    scheduler = RoundScheduler(
        directory,
        emit=socketio.emit,
        start_task=socketio.start_background_task,
        sleep=socketio.sleep,
        settings=app.config,
    )
    app.extensions["wordwiz"] = {
        "rooms": directory,
        "connections": registry,
        "oracle": oracle,
        "scheduler": scheduler,
    }

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")
    app.register_blueprint(words_bp, url_prefix="/api")

    register_socketio_handlers(
        socketio,
        directory=directory,
        registry=registry,
        oracle=oracle,
        scheduler=scheduler,
        settings=app.config,
    )

    if dist_dir.exists():
        @app.get("/")
        def index():
            return send_from_directory(dist_dir, "index.html")

        @app.get("/<path:path>")
        def static_proxy(path: str):
            file_path = dist_dir / path
            if file_path.exists() and file_path.is_file():
                return send_from_directory(dist_dir, path)
            return send_from_directory(dist_dir, "index.html")

    return app, socketio
