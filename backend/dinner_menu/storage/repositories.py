from sqlmodel import Session

from dinner_menu.logging import get_logger
from dinner_menu.storage.models import LLMCallLog

logger = get_logger(__name__)


def log_llm_call(
    session: Session,
    prompt_name: str,
    prompt_version: str,
    model: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> LLMCallLog:
    entry = LLMCallLog(
        prompt_name=prompt_name,
        prompt_version=prompt_version,
        model=model,
        input_payload=input_payload,
        output_payload=output_payload,
        latency_ms=latency_ms,
    )
    session.add(entry)
    session.commit()
    session.refresh(entry)
    logger.debug("llm_call_log.created id=%s name=%s latency_ms=%s", entry.id, prompt_name, latency_ms)
    return entry

