"""Flask application: text-to-speech proxy plus static file serving."""

from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, abort, send_file
from flask_cors import CORS
from werkzeug.exceptions import Forbidden
import logging

from pinyin_match.config import Config
from pinyin_match.web.tts_service import GoogleTextToSpeechService


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

MIME_TYPES = {
    '.html': 'text/html',
    '.css': 'text/css',
    '.js': 'application/javascript',
    '.ico': 'image/x-icon',
}
DEFAULT_MIME_TYPE = 'application/octet-stream'


def resolve_static_path(static_root: Path, request_path: str) -> Path:
    """
    Map a request path to a file under the static root.

    Args:
        static_root: Absolute, resolved static directory
        request_path: URL path without the leading slash; empty means the index

    Returns:
        Resolved path inside static_root (it may not exist)

    Raises:
        Forbidden: If the path resolves outside static_root
    """
    relative = request_path.lstrip('/') or Config.INDEX_DOCUMENT
    candidate = (static_root / relative).resolve()
    if candidate != static_root and static_root not in candidate.parents:
        raise Forbidden(f"Path escapes static root: {request_path}")
    return candidate


def create_app(config: Optional[Dict[str, Any]] = None):
    """
    Create and configure the Flask application.

    Args:
        config: Optional overrides for app.config (STATIC_ROOT,
            GOOGLE_TTS_API_KEY, TTS_SERVICE, ...)
    """
    app = Flask(__name__, static_folder=None)

    # Configure CORS for API endpoints
    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST"],
            "allow_headers": ["Content-Type"]
        }
    })

    app.config['STATIC_ROOT'] = Config.get_static_dir()
    app.config['GOOGLE_TTS_API_KEY'] = Config.get_tts_api_key()
    if config:
        app.config.update(config)

    app.config['STATIC_ROOT'] = Path(app.config['STATIC_ROOT']).resolve()
    if not app.config.get('TTS_SERVICE'):
        app.config['TTS_SERVICE'] = GoogleTextToSpeechService(app.config['GOOGLE_TTS_API_KEY'])

    register_routes(app)

    return app


def register_routes(app):
    """Register all application routes."""
    from pinyin_match.web import api
    app.register_blueprint(api.bp)

    @app.route('/', defaults={'filename': ''}, methods=['GET'], provide_automatic_options=False)
    @app.route('/<path:filename>', methods=['GET'], provide_automatic_options=False)
    def serve_static(filename):
        """Serve a file from the static root; '/' maps to the index document."""
        static_root = app.config['STATIC_ROOT']
        try:
            file_path = resolve_static_path(static_root, filename)
        except Forbidden:
            logger.warning(f"Blocked static path outside root: {filename}")
            abort(403)

        if not file_path.is_file():
            abort(404)

        mimetype = MIME_TYPES.get(file_path.suffix.lower(), DEFAULT_MIME_TYPE)
        return send_file(file_path, mimetype=mimetype)
