import re
from typing import Optional

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*\s*")
_FENCE = "```"


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence such as ```json ... ```."""
    cleaned = text.strip()
    if cleaned.startswith(_FENCE):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        end = cleaned.rfind(_FENCE)
        if end >= 0:
            cleaned = cleaned[:end]
        cleaned = cleaned.strip()
    return cleaned


def extract_first_json_array(text: str) -> Optional[str]:
    """
    Return the first balanced ``[...]`` block found in ``text``, or None.

    Brackets inside quoted JSON strings are ignored while counting depth, so
    a value like ``"see [1]"`` does not end the array early.
    """
    if not text:
        return None
    cleaned = strip_code_fence(text)
    start = cleaned.find("[")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(cleaned)):
        c = cleaned[i]
        if in_string:
            if escaped:
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == '"':
                in_string = False
            continue
        if c == '"':
            in_string = True
        elif c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth == 0:
                return cleaned[start : i + 1]
    return None
