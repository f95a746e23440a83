from typing import Iterable

import httpx
from pydantic import ValidationError

from dinner_menu.logging import get_logger
from dinner_menu.schemas.menu import MenuItem, MenuPreferences
from dinner_menu.services.menu.prompts import build_menu_prompt

logger = get_logger(__name__)

MENU_CLIENT_TIMEOUT = 60.0
GENERATE_MENU_PATH = "/api/generate-menu"
DEFAULT_ERROR = "Failed to generate menu"
TRANSPORT_ERROR = "Failed to generate menu. Please try again."


class MenuClientError(Exception):
    """Carries the message the user should see."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MenuClient:
    """Calls the menu endpoint the way the web form does: no retry, no caching."""

    def __init__(self, base_url: str, timeout: float = MENU_CLIENT_TIMEOUT) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def build_payload(self, preferences: MenuPreferences) -> dict:
        return {
            "prompt": build_menu_prompt(preferences),
            "timeToMake": preferences.time_to_make.value,
            "priceRange": preferences.price_range.value,
            "restrictions": [r.value for r in preferences.restrictions],
        }

    def generate_menu(self, preferences: MenuPreferences) -> list[MenuItem]:
        url = f"{self._base_url}{GENERATE_MENU_PATH}"
        logger.info(
            "menu_client.generate time=%s price=%s restrictions=%s",
            preferences.time_to_make.value,
            preferences.price_range.value,
            [r.value for r in preferences.restrictions],
        )
        try:
            resp = httpx.post(url, json=self.build_payload(preferences), timeout=self._timeout)
        except httpx.HTTPError as exc:
            logger.warning("menu_client.transport_failed url=%s error=%s", url, exc)
            raise MenuClientError(TRANSPORT_ERROR) from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not resp.is_success:
            raise MenuClientError(data.get("message") or DEFAULT_ERROR, status_code=resp.status_code)

        menu = data.get("menu")
        if not data.get("success") or not menu or not isinstance(menu, list):
            raise MenuClientError("Invalid response format", status_code=resp.status_code)
        try:
            return [MenuItem.model_validate(item) for item in menu]
        except ValidationError as exc:
            logger.warning("menu_client.invalid_items error=%s", exc)
            raise MenuClientError("Invalid response format", status_code=resp.status_code) from exc


def format_menu(items: Iterable[MenuItem]) -> str:
    """Plain-text rendering: one line per day."""
    return "\n".join(f"{item.day}: {item.meal_name} - {item.simple_description}" for item in items)
