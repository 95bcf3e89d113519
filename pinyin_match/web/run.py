"""Launcher for the Pinyin Match server."""

import logging
import os

from pinyin_match.config import Config
from pinyin_match.web.app import create_app

logger = logging.getLogger(__name__)


def main():
    """Run the Flask development server."""
    app = create_app()

    # Security: Only bind to localhost when debug mode is enabled
    # to prevent exposing the interactive debugger to the network
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    host = '127.0.0.1' if debug_mode else '0.0.0.0'
    port = Config.get_port()

    logger.info(f"Pinyin Match: http://localhost:{port}")
    if app.config['TTS_SERVICE'].enabled:
        logger.info(f"Google TTS enabled ({Config.GOOGLE_TTS_LANGUAGE}).")
    else:
        logger.warning(
            "GOOGLE_TTS_API_KEY not set: install a Chinese voice for local speech "
            "or set the key for Google TTS."
        )

    app.run(debug=debug_mode, host=host, port=port)


if __name__ == '__main__':
    main()
