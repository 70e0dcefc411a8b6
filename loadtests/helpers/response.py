"""Turn Reviews API error responses into one-line Locust failure messages.

The API answers failures in three shapes:

- Domain errors (400/403/404/429): {"error": {"field": ["msg", ...]}}
- Request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Missing identity (401): {"detail": "Authentication required"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL = 300


def _field_messages(errors: dict) -> str:
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field}: {messages}")
    return " | ".join(parts)


def _validation_messages(details: list) -> str:
    # Drop the leading "body"/"query"/"path" segment FastAPI puts in loc
    parts = []
    for item in details:
        loc = [str(p) for p in item.get("loc", [])[1:]]
        msg = item.get("msg", "invalid")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return " | ".join(parts)


def describe_failure(response: Response) -> str:
    """``"<status>: <detail>"`` for a failed API call."""
    try:
        body = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return f"{response.status_code}: {text[:MAX_DETAIL] or '(empty body)'}"

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        detail = _field_messages(body["error"])
    elif isinstance(body, dict) and isinstance(body.get("detail"), list):
        detail = _validation_messages(body["detail"])
    elif isinstance(body, dict) and "detail" in body:
        detail = str(body["detail"])
    else:
        detail = str(body)

    return f"{response.status_code}: {detail[:MAX_DETAIL]}"
