"""Centralized error response formatting for web API endpoints.

This module provides consistent error response formatting across API
endpoints, including error codes, messages, and action_required fields.
"""

from typing import Any, Dict, Optional, Tuple
from flask import jsonify
import logging

logger = logging.getLogger(__name__)


class ErrorCode:
    """Standard error codes for API responses."""

    # Request validation errors
    INVALID_JSON = "INVALID_JSON"
    MISSING_TEXT = "MISSING_TEXT"

    # Speech synthesis errors
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    SYNTHESIS_FAILED = "SYNTHESIS_FAILED"

    # General errors
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ActionRequired:
    """Standard action_required values for error responses."""

    FIX_REQUEST = "fix_request"
    CONFIGURE_CREDENTIALS = "configure_credentials"
    USE_LOCAL_SPEECH = "use_local_speech"
    CONTACT_SUPPORT = "contact_support"


def format_error_response(
    error_message: str,
    error_code: str,
    action_required: Optional[str] = None,
    additional_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Format a consistent error response for API endpoints.

    Args:
        error_message: Human-readable error message
        error_code: Machine-readable error code (use ErrorCode constants)
        action_required: Specific action needed (use ActionRequired constants)
        additional_data: Additional data to include in response

    Returns:
        Dictionary formatted for JSON response

    Example:
        >>> format_error_response("Missing text", ErrorCode.MISSING_TEXT)
        {'success': False, 'error': 'Missing text', 'error_code': 'MISSING_TEXT'}
    """
    response = {
        'success': False,
        'error': error_message,
        'error_code': error_code
    }

    if action_required:
        response['action_required'] = action_required

    if additional_data:
        response.update(additional_data)

    return response


def invalid_json_response() -> Tuple[Any, int]:
    """Request body could not be decoded as a JSON object."""
    response = format_error_response(
        error_message="Invalid JSON",
        error_code=ErrorCode.INVALID_JSON,
        action_required=ActionRequired.FIX_REQUEST
    )
    return jsonify(response), 400


def missing_text_response() -> Tuple[Any, int]:
    """Request body has no usable text field."""
    response = format_error_response(
        error_message="Missing text",
        error_code=ErrorCode.MISSING_TEXT,
        action_required=ActionRequired.FIX_REQUEST
    )
    return jsonify(response), 400


def missing_credentials_response(message: Optional[str] = None) -> Tuple[Any, int]:
    """
    No Google TTS API key is configured.

    Clients fall back to local synthesis on this response.
    """
    response = format_error_response(
        error_message=message or "GOOGLE_TTS_API_KEY not set",
        error_code=ErrorCode.MISSING_CREDENTIALS,
        action_required=ActionRequired.CONFIGURE_CREDENTIALS
    )
    return jsonify(response), 500


def synthesis_failed_response(error_details: str) -> Tuple[Any, int]:
    """
    The upstream speech API call failed or returned no audio.

    Args:
        error_details: Message describing the upstream failure
    """
    response = format_error_response(
        error_message=error_details,
        error_code=ErrorCode.SYNTHESIS_FAILED,
        action_required=ActionRequired.USE_LOCAL_SPEECH
    )
    return jsonify(response), 500


def unexpected_error_response(
    error_details: Optional[str] = None,
    include_details: bool = False
) -> Tuple[Any, int]:
    """
    Create a standardized unexpected error response.

    Args:
        error_details: Details about the error (for logging)
        include_details: Whether to include error details in response (dev mode)
    """
    if include_details and error_details:
        message = f"An unexpected error occurred: {error_details}"
    else:
        message = "An unexpected error occurred. Please try again."

    response = format_error_response(
        error_message=message,
        error_code=ErrorCode.UNEXPECTED_ERROR,
        action_required=ActionRequired.CONTACT_SUPPORT
    )
    return jsonify(response), 500
