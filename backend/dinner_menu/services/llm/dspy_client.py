import time
from typing import Any

import dspy
from sqlalchemy.exc import SQLAlchemyError

from dinner_menu.config import settings
from dinner_menu.logging import get_logger
from dinner_menu.storage.db import get_session
from dinner_menu.storage.repositories import log_llm_call
from dinner_menu.utils.timing import format_duration

logger = get_logger(__name__)


def make_gemini_lm() -> dspy.LM:
    """Build the LM from current settings; the API key is read at call time."""
    return dspy.LM(
        settings.llm_model,
        api_key=settings.gemini_api_key,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_output_tokens,
        top_p=settings.llm_top_p,
        top_k=settings.llm_top_k,
        timeout=settings.llm_timeout_s,
        num_retries=settings.llm_num_retries,
        cache=False,
    )


def complete(prompt: str) -> str:
    """Send a raw prompt to the model and return the first completion's text."""
    lm = make_gemini_lm()
    logger.info("llm.request provider=%s model=%s prompt_chars=%s", settings.llm_provider, settings.llm_model, len(prompt))
    outputs = lm(prompt)
    if not outputs:
        return ""
    first = outputs[0]
    # dspy returns dicts instead of strings when logprobs or tool calls are requested
    if isinstance(first, dict):
        first = first.get("text") or ""
    return str(first or "")


def run_with_logging(
    prompt_name: str,
    prompt_version: str,
    fn: Any,
    **kwargs: Any,
) -> Any:
    start = time.time()
    logger.info(
        "[TIMING] llm.call.start name=%s version=%s model=%s",
        prompt_name,
        prompt_version,
        settings.llm_model,
    )
    try:
        result = fn(**kwargs)
    except Exception as exc:
        latency_ms = int((time.time() - start) * 1000)
        logger.warning(
            "[TIMING] llm.call.failed name=%s latency_ms=%s error=%s",
            prompt_name,
            latency_ms,
            exc,
        )
        raise
    latency_ms = int((time.time() - start) * 1000)
    if settings.llm_call_logging:
        _record_call(prompt_name, prompt_version, str(kwargs), str(result), latency_ms)
    logger.info(
        "[TIMING] llm.call.end name=%s latency_ms=%s (%s)",
        prompt_name,
        latency_ms,
        format_duration(latency_ms),
    )
    return result


def _record_call(
    prompt_name: str,
    prompt_version: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> None:
    """Persist the call. Write failures are logged, not raised."""
    try:
        with get_session() as session:
            log_llm_call(
                session=session,
                prompt_name=prompt_name,
                prompt_version=prompt_version,
                model=settings.llm_model,
                input_payload=input_payload,
                output_payload=output_payload,
                latency_ms=latency_ms,
            )
    except SQLAlchemyError as exc:
        logger.warning("llm_call_log.write_failed name=%s error=%s", prompt_name, exc)
