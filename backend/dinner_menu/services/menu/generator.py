"""
Generate a 7-day dinner menu from a prompt via the configured model.
"""

from dinner_menu.config import settings
from dinner_menu.exceptions import (
    ConfigurationError,
    ContentFilteredError,
    GenerationFailedError,
    MenuApiError,
    ServiceBusyError,
)
from dinner_menu.logging import get_logger
from dinner_menu.schemas.menu import MenuItem
from dinner_menu.services.llm.dspy_client import complete, run_with_logging
from dinner_menu.services.menu.prompts import WEEKLY_MENU_PROMPT_NAME, WEEKLY_MENU_PROMPT_VERSION
from dinner_menu.services.parsing.menu_parser import parse_menu

logger = get_logger(__name__)

RAW_PREVIEW_CHARS = 200


def map_provider_error(exc: Exception) -> MenuApiError:
    """Translate a model-provider failure into the error returned to the client."""
    message = str(exc) or exc.__class__.__name__
    if "API_KEY_INVALID" in message:
        return ConfigurationError("Invalid API key. Please contact support.")
    if "RATE_LIMIT_EXCEEDED" in message:
        return ServiceBusyError()
    if "SAFETY" in message:
        return ContentFilteredError()
    return GenerationFailedError(details=None if settings.is_production else message)


def ensure_configured() -> None:
    if not settings.gemini_api_key:
        logger.error("menu.generate.config_missing setting=GEMINI_API_KEY")
        raise ConfigurationError()


def generate_menu(prompt: str) -> list[MenuItem]:
    """Call the model and return the validated menu; every failure raises a MenuApiError."""
    ensure_configured()
    try:
        text = run_with_logging(
            prompt_name=WEEKLY_MENU_PROMPT_NAME,
            prompt_version=WEEKLY_MENU_PROMPT_VERSION,
            fn=complete,
            prompt=prompt,
        )
    except Exception as exc:
        logger.exception("menu.generate.provider_error error=%s", exc)
        raise map_provider_error(exc) from exc

    text = text or ""
    logger.info("menu.generate.raw preview=%s...", text[:RAW_PREVIEW_CHARS])
    items = parse_menu(text)
    logger.info("menu.generate.success items=%s", len(items))
    return items
