"""
clarityweb/core/route_gate.py

Purpose: Edge route gate

- Runs before routing on every gated path
- Authentication signal is session cookie presence only (no verification)
- Protected pages without a cookie -> /login?callbackUrl=<path>
- Login/register pages with a cookie -> /dashboard
"""

import re
from enum import Enum
from typing import Mapping, NamedTuple, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse

from clarityweb.services.session_service import has_session_cookie
from clarityweb.utils.constants import (
    AUTH_ROUTES,
    CALLBACK_URL_PARAM,
    GATED_PATH_PATTERN,
    PROTECTED_ROUTE_PREFIXES,
    ROUTE_DASHBOARD,
    ROUTE_LOGIN,
)

_gated_path = re.compile(GATED_PATH_PATTERN)


class GateAction(str, Enum):
    PASS = "pass"
    LOGIN = "login"
    DASHBOARD = "dashboard"


class GateDecision(NamedTuple):
    action: GateAction
    path: Optional[str] = None
    query: str = ""


def is_gated_path(path: str) -> bool:
    return _gated_path.fullmatch(path) is not None


def is_protected_route(path: str) -> bool:
    return path.startswith(PROTECTED_ROUTE_PREFIXES)


def is_auth_route(path: str) -> bool:
    return path in AUTH_ROUTES


def decide(path: str, cookies: Mapping[str, str]) -> GateDecision:
    """
    Decides what the gate does with a request.

    Args:
        path: Request path, without query string
        cookies: Request cookies

    Returns:
        GateDecision; for redirects, path and query of the target
    """
    if not is_gated_path(path):
        return GateDecision(GateAction.PASS)

    authenticated = has_session_cookie(cookies)

    if is_protected_route(path) and not authenticated:
        return GateDecision(
            GateAction.LOGIN,
            ROUTE_LOGIN,
            urlencode({CALLBACK_URL_PARAM: path}),
        )

    if is_auth_route(path) and authenticated:
        return GateDecision(GateAction.DASHBOARD, ROUTE_DASHBOARD)

    return GateDecision(GateAction.PASS)


async def route_gate_middleware(request: Request, call_next):
    """HTTP middleware applying decide() to every request."""
    decision = decide(request.url.path, request.cookies)

    if decision.action is GateAction.PASS:
        return await call_next(request)

    target = request.url.replace(path=decision.path, query=decision.query)
    return RedirectResponse(url=str(target), status_code=307)
