import json
import logging
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from task_planner.generate.extract import extract_first_json_array
from task_planner.run_utils.metrics import record_degradation
from task_planner.utils.dto import Task

logger = logging.getLogger(__name__)


class TaskItem(BaseModel):
    """One task object as the model writes it inside its reply."""

    model_config = ConfigDict(extra="ignore")

    description: str = ""
    duration: str = ""
    dependencies: str = ""

    @field_validator("description", "duration", "dependencies", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (bool, int, float)):
            return str(v)
        if isinstance(v, list) and all(isinstance(x, str) for x in v):
            return ", ".join(x.strip() for x in v if x.strip())
        return v


_TASK_LIST = TypeAdapter(List[TaskItem])


def _degrade(reason: str, message: str) -> List[Task]:
    logger.warning("Model output unusable: %s", message, extra={"reason": reason})
    record_degradation(reason)
    return []


def _first(value: Any) -> Optional[Any]:
    if isinstance(value, list) and value:
        return value[0]
    return None


def walk_envelope(envelope: Any) -> Tuple[Optional[str], str]:
    """
    Walk ``candidates[0].content.parts[0].text``.

    Returns ``(text, "")`` on success, or ``(None, reason)`` naming the first
    level that is missing or empty.
    """
    candidate = _first(envelope.get("candidates")) if isinstance(envelope, dict) else None
    if candidate is None:
        return None, "no_candidates"
    content = candidate.get("content") if isinstance(candidate, dict) else None
    part = _first(content.get("parts")) if isinstance(content, dict) else None
    if part is None:
        return None, "no_parts"
    text = part.get("text") if isinstance(part, dict) else None
    if not isinstance(text, str) or not text:
        return None, "empty_text"
    return text, ""


def extract_response_text(envelope: Any) -> Optional[str]:
    return walk_envelope(envelope)[0]


def decode_tasks(array_text: str) -> List[Task]:
    """Decode a JSON array of task objects. Raises ValidationError on bad input."""
    tasks: List[Task] = []
    for item in _TASK_LIST.validate_json(array_text):
        description = item.description.strip()
        if not description:
            logger.info("Skipping task without description: %s", item.model_dump())
            continue
        tasks.append(
            Task(
                description=description,
                duration=item.duration.strip(),
                dependencies=item.dependencies.strip(),
            )
        )
    return tasks


_REASON_MESSAGES = {
    "no_candidates": "no candidates in provider response",
    "no_parts": "no parts in provider response",
    "empty_text": "empty text in provider response",
}


def parse_tasks(raw_response: Optional[str]) -> List[Task]:
    """
    Turn a raw ``generateContent`` response body into tasks.

    Never raises: every malformed reply degrades to an empty list, and the
    reason is logged and counted in the metrics.
    """
    if not raw_response:
        return _degrade("empty_response", "empty provider response")

    try:
        envelope = json.loads(raw_response)
    except (ValueError, RecursionError) as e:
        return _degrade("invalid_envelope", f"response is not JSON: {e}")

    text, reason = walk_envelope(envelope)
    if text is None:
        return _degrade(reason, _REASON_MESSAGES[reason])
    logger.debug("Model text: %s", text)

    array_text = extract_first_json_array(text)
    if array_text is None:
        if text.strip().startswith("["):
            array_text = text.strip()
        else:
            return _degrade("no_json_array", "no JSON array found in model output")

    try:
        return decode_tasks(array_text)
    except ValidationError as e:
        return _degrade(
            "invalid_task_array",
            f"task array does not match schema ({e.error_count()} errors)",
        )
    except (ValueError, RecursionError) as e:
        return _degrade("invalid_task_array", f"task array could not be decoded: {e}")
