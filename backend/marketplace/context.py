"""
Name: Request Context

Responsibilities:
  - Hold the correlation data of the request being served
  - Feed request_id, method and path into every log line

Collaborators:
  - middleware.py: binds the context at request start, resets it at the end
  - logger.py: reads it for log enrichment

Constraints:
  - Log correlation only: the authenticated identity is passed to handlers
    explicitly, never through this context
"""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str = ""
    path: str = ""


_current: ContextVar[Optional[RequestContext]] = ContextVar("request_context", default=None)


def bind_request_context(request_id: str, method: str = "", path: str = "") -> RequestContext:
    """R: Make a new context current for the running request."""
    ctx = RequestContext(request_id=request_id, method=method, path=path)
    _current.set(ctx)
    return ctx


def get_context_dict() -> dict:
    """R: Non-empty context fields for log enrichment."""
    ctx = _current.get()
    if ctx is None:
        return {}
    fields = {"request_id": ctx.request_id, "method": ctx.method, "path": ctx.path}
    return {key: value for key, value in fields.items() if value}


def clear_context() -> None:
    _current.set(None)
