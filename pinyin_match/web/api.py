"""API endpoints for the text-to-speech proxy."""

import json
import logging

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from pinyin_match.errors import MissingCredentialsError, SpeechSynthesisError
from pinyin_match.web.error_responses import (
    invalid_json_response,
    missing_credentials_response,
    missing_text_response,
    synthesis_failed_response,
    unexpected_error_response,
)

# Create logger
logger = logging.getLogger(__name__)

# Create API blueprint
bp = Blueprint('api', __name__, url_prefix='/api')


@bp.errorhandler(Exception)
def handle_unexpected_error(e):
    """Handle unexpected errors with proper logging."""
    if isinstance(e, HTTPException):
        return e

    logger.error(f"Unexpected error: {e}", exc_info=True)

    # In development, include more details
    return unexpected_error_response(
        error_details=str(e),
        include_details=current_app.debug
    )


def get_tts_service():
    return current_app.config['TTS_SERVICE']


@bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'ok',
        'message': 'Pinyin Match API is running',
        'remote_speech': get_tts_service().enabled
    })


@bp.route('/speak', methods=['POST'])
def speak():
    """
    Synthesize Mandarin speech for the given text.

    Expects JSON body:
        {"text": "nǐ hǎo"}

    Returns:
        MP3 audio (audio/mpeg, not cacheable) on success, or a JSON error:
        400 for a malformed body or missing text, 500 when no API key is
        configured or the upstream call fails.
    """
    raw_body = request.get_data(as_text=True)
    try:
        payload = json.loads(raw_body)
    except ValueError:
        logger.warning("Rejected /api/speak request with invalid JSON")
        return invalid_json_response()

    text = payload.get('text') if isinstance(payload, dict) else None
    if not isinstance(text, str) or not text.strip():
        return missing_text_response()
    text = text.strip()

    service = get_tts_service()
    if not service.enabled:
        logger.warning("Speech requested but GOOGLE_TTS_API_KEY is not set")
        return missing_credentials_response()

    try:
        audio = service.synthesize(text)
    except MissingCredentialsError as e:
        return missing_credentials_response(str(e))
    except SpeechSynthesisError as e:
        logger.error(f"Speech synthesis failed: {e}")
        return synthesis_failed_response(str(e))

    return Response(
        audio,
        status=200,
        mimetype='audio/mpeg',
        headers={'Cache-Control': 'no-store'}
    )
