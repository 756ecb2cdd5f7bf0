"""
clarityweb/api/deps.py

Purpose: Request dependencies

- Hands out the objects the lifespan stored on app.state
- Session guards for the user API (401) and the dashboard (redirect)
- Storage fault boundary shared by the JSON endpoints
"""

from contextlib import contextmanager
from typing import Optional

from fastapi import Depends, Request

from clarityweb.core.exceptions import ClarityWebError, InternalError, LoginRedirect, UnauthorizedError
from clarityweb.core.logging import get_logger, LogContext
from clarityweb.db.mongo import DatabaseConnector
from clarityweb.schemas.session import Session
from clarityweb.services.readability_service import ReadabilityExtractor
from clarityweb.services.session_service import SessionStore
from clarityweb.utils.constants import ERROR_UNAUTHORIZED, ROUTE_LOGIN

logger = get_logger(__name__)


def get_db_connector(request: Request) -> DatabaseConnector:
    return request.app.state.db_connector


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_extractor(request: Request) -> ReadabilityExtractor:
    return request.app.state.extractor


async def get_session(
    request: Request,
    session_store: SessionStore = Depends(get_session_store),
) -> Optional[Session]:
    return await session_store.get_session(request)


async def require_api_session(
    session: Optional[Session] = Depends(get_session),
) -> Session:
    """
    Session with a known email, or 401. Runs before any storage access.
    """
    if session is None or not session.user.email:
        raise UnauthorizedError(ERROR_UNAUTHORIZED)
    return session


async def require_dashboard_session(
    session: Optional[Session] = Depends(get_session),
) -> Session:
    """
    Layout guard for the authenticated area.

    The route gate only saw a cookie; this verifies it. Without a valid
    session the page is never rendered.
    """
    if session is None:
        raise LoginRedirect(ROUTE_LOGIN)
    return session


@contextmanager
def storage_errors(action: str, email: str):
    """
    Fault boundary for storage-backed handlers.

    Domain errors (401/404/422) pass through unchanged; anything else is
    logged with the account and re-raised as a generic 500.
    """
    try:
        yield
    except ClarityWebError:
        raise
    except Exception as e:
        with LogContext(user_email=email):
            logger.error(f"Error {action}: {e}", exc_info=True)
        raise InternalError() from e
