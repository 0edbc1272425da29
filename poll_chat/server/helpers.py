import time
from datetime import datetime, timezone
from typing import Optional

from sanic import Request
from sanic.response import HTTPResponse, json as json_response

from .errors import BadInput, ChatError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def get_body(request: Request) -> dict:
    body = request.json
    if not isinstance(body, dict):
        raise BadInput("Request body must be a JSON object")
    return body


def get_since(request: Request) -> int:
    raw: Optional[str] = request.args.get("since")
    if raw is None or raw == "":
        return 0
    try:
        return int(raw)
    except ValueError:
        raise BadInput(f"Invalid since value: {raw!r}") from None


def error_response(error: ChatError) -> HTTPResponse:
    return json_response({"error": error.message}, status=error.status_code)
