"""
JSON helpers for tool inputs that arrive as JSON-encoded strings.
"""

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def safe_json_parse(text: Optional[str]) -> Optional[Any]:
    """
    Parse a JSON string, returning None when it is empty or malformed.

    Malformed input is logged at WARNING and never raised; callers decide
    whether a missing value is an error.

    Args:
        text: JSON-encoded string (may be None or empty)

    Returns:
        Parsed value, or None
    """
    if not text:
        return None

    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to parse JSON: {e}", extra={"json_string": text})
        return None
