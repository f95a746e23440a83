"""
Turn free-form model output into a validated 7-day menu.

Stages, each usable on its own:
  strip_code_fences -> extract_json_array -> load_menu_json -> validate_menu
"""

import json
import re
from typing import Any

from dinner_menu.exceptions import (
    InvalidAIResponseError,
    InvalidMenuItemError,
    InvalidMenuStructureError,
    MenuParseError,
)
from dinner_menu.logging import get_logger
from dinner_menu.schemas.menu import DAYS_OF_WEEK, REQUIRED_ITEM_KEYS, MenuItem

logger = get_logger(__name__)

MENU_LENGTH = len(DAYS_OF_WEEK)

_JSON_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_OPEN = re.compile(r"```\n?")
_FENCE_CLOSE = re.compile(r"\n?```\Z")
# Greedy: first "[" through last "]", across lines.
_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` marker and a trailing ``` marker, if present."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = _JSON_FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    elif cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned


def extract_json_array(text: str) -> str:
    """Return the first bracket-delimited substring, or raise InvalidAIResponseError."""
    match = _JSON_ARRAY.search(text or "")
    if not match:
        logger.error("menu.parse.no_array text=%s", text)
        raise InvalidAIResponseError()
    return match.group(0)


def load_menu_json(array_text: str) -> Any:
    try:
        return json.loads(array_text)
    except json.JSONDecodeError as exc:
        logger.error("menu.parse.json_error error=%s attempted=%s", exc, array_text)
        raise MenuParseError() from exc


def _missing_key(item: Any) -> str | None:
    if not isinstance(item, dict):
        return REQUIRED_ITEM_KEYS[0]
    for key in REQUIRED_ITEM_KEYS:
        value = item.get(key)
        if not isinstance(value, str) or not value.strip():
            return key
    return None


def validate_menu(data: Any) -> list[MenuItem]:
    """Check for exactly 7 objects with non-empty day, meal_name and simple_description."""
    if not isinstance(data, list) or len(data) != MENU_LENGTH:
        logger.error("menu.validate.invalid_structure data=%s", data)
        raise InvalidMenuStructureError()

    for item in data:
        key = _missing_key(item)
        if key is not None:
            logger.error("menu.validate.missing_key key=%s item=%s", key, item)
            raise InvalidMenuItemError()

    items = [MenuItem.model_validate(item) for item in data]
    days = tuple(item.day.strip().capitalize() for item in items)
    if days != DAYS_OF_WEEK:
        # Order is not part of validation, but the prompt asks for Monday..Sunday.
        logger.warning("menu.validate.unexpected_days days=%s", list(days))
    return items


def parse_menu(text: str) -> list[MenuItem]:
    cleaned = strip_code_fences(text)
    array_text = extract_json_array(cleaned)
    return validate_menu(load_menu_json(array_text))
