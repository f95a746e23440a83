"""
Weekly dinner menu generation.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from dinner_menu.exceptions import BadRequestError, MethodNotAllowedError, RateLimitedError
from dinner_menu.logging import get_logger
from dinner_menu.schemas.menu import MenuMetadata, MenuRequest, MenuResponse
from dinner_menu.services.menu.generator import generate_menu
from dinner_menu.services.menu.prompts import menu_options
from dinner_menu.services.rate_limit import SlidingWindowRateLimiter, get_rate_limiter
from dinner_menu.utils.request import client_ip
from dinner_menu.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)

# Registered for every method so non-POST calls get the API's own 405 body.
GENERATE_MENU_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_menu_request(request: Request) -> MenuRequest:
    raw = await request.body()
    if not raw.strip():
        return MenuRequest()
    try:
        payload = await request.json()
    except ValueError as exc:
        raise BadRequestError("Request body must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")
    try:
        return MenuRequest.model_validate(payload)
    except ValidationError as exc:
        logger.warning("menu.request.invalid errors=%s", exc.errors(include_url=False, include_context=False))
        raise BadRequestError("Request body has invalid fields") from exc


@router.api_route(
    "/generate-menu",
    methods=GENERATE_MENU_METHODS,
    response_model=MenuResponse,
    response_model_exclude_none=True,
)
async def post_generate_menu(
    request: Request,
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
):
    """
    Generate a 7-day dinner menu.
    Expects: { "prompt", "timeToMake", "priceRange", "restrictions" }
    Returns: { "success": true, "menu": [7 items], "metadata": {...} }
    """
    if request.method == "OPTIONS":
        return Response(status_code=200)
    if request.method != "POST":
        raise MethodNotAllowedError()

    client_id = client_ip(request)
    if not limiter.allow(client_id):
        raise RateLimitedError()

    body = await _read_menu_request(request)
    if not body.prompt:
        raise BadRequestError("Prompt is required")

    logger.info(
        "menu.generate.start client=%s time=%s price=%s restrictions=%s",
        client_id,
        body.time_to_make,
        body.price_range,
        body.restrictions,
    )
    with time_span("menu.generate.total", client=client_id):
        items = await run_in_threadpool(generate_menu, body.prompt)

    return MenuResponse(
        menu=items,
        metadata=MenuMetadata(
            time_to_make=body.time_to_make,
            price_range=body.price_range,
            restrictions=body.restrictions,
            generated_at=datetime.now(timezone.utc),
        ),
    )


@router.get("/menu-options")
def get_menu_options() -> dict:
    """Preference values the form offers, with labels and defaults."""
    return menu_options()
