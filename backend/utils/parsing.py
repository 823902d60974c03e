import json
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional, Dict

CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
NUMBER = re.compile(r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    return CODE_FENCE.sub("", text.strip())


def extract_json_block(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Extract the first balanced JSON object from text, tolerating fences and control characters."""
    if not text:
        return None

    text = strip_code_fence(text)
    try:
        direct = json.loads(text)
        if isinstance(direct, dict):
            return direct
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                try:
                    return json.loads(candidate)
                except json.JSONDecodeError:
                    try:
                        cleaned = re.sub(r"[\x00-\x1f]", "", candidate)
                        return json.loads(cleaned)
                    except json.JSONDecodeError:
                        return None
    return None


def parse_score(text: Optional[str]) -> Optional[float]:
    """Parse the first number in a model answer such as '0.6' or 'Score: -0.25'."""
    if not text:
        return None
    m = NUMBER.search(text.strip())
    if not m:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


FRACTION = re.compile(r"\.(\d{6})\d+")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp ('Z' suffix and over-long fractions allowed)
    or an RFC-822 date. Naive values are taken as UTC. Returns None when the
    value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        try:
            parsed = datetime.fromisoformat(FRACTION.sub(r".\1", raw).replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(raw)
            except (TypeError, ValueError, IndexError):
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
