"""
clarityweb/api/dashboard.py

Purpose: Authenticated dashboard area

- Every page depends on require_dashboard_session; without a verified
  session the guard redirects to /login before anything is rendered
- Renders the layout shell: navbar (name) and sidebar (name, email)
- Page content itself is rendered client-side
"""

from html import escape
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from clarityweb.api.deps import require_dashboard_session
from clarityweb.core.exceptions import NotFoundError
from clarityweb.schemas.session import Session
from clarityweb.utils.constants import APP_NAME, DASHBOARD_SECTIONS, ROUTE_DASHBOARD

router = APIRouter()


def _text(value: Optional[str]) -> str:
    return escape(value) if value else ""


def render_layout(
    session: Session,
    section: Optional[str] = None,
    item_id: Optional[str] = None,
) -> str:
    """
    Renders the dashboard shell around an (empty) page container.

    item_id, when given, is handed to the client-side page as data-item-id.
    """
    name = _text(session.user.name)
    email = _text(session.user.email)

    item = f' data-item-id="{escape(item_id)}"' if item_id else ""
    current = ' aria-current="page"'
    links = "\n".join(
        f'            <li><a href="{href}"'
        f'{current if slug == section else ""}>{label}</a></li>'
        for slug, (label, href) in DASHBOARD_SECTIONS.items()
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{APP_NAME} - Dashboard</title>
</head>
<body>
    <nav class="navbar" data-authenticated="true">
        <a href="{ROUTE_DASHBOARD}">{APP_NAME}</a>
        <span class="user-name">{name}</span>
    </nav>
    <div class="layout">
        <aside class="sidebar">
            <div class="user-name">{name}</div>
            <div class="user-email">{email}</div>
            <ul>
{links}
            </ul>
        </aside>
        <main id="main-content" tabindex="-1" data-section="{section or "home"}"{item}></main>
    </div>
</body>
</html>
"""


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_home(session: Session = Depends(require_dashboard_session)):
    return HTMLResponse(render_layout(session))


@router.get("/dashboard/history/{item_id}", response_class=HTMLResponse)
async def dashboard_history_item(
    item_id: str,
    session: Session = Depends(require_dashboard_session),
):
    return HTMLResponse(render_layout(session, "history", item_id))


@router.get("/dashboard/{section}", response_class=HTMLResponse)
async def dashboard_section(
    section: str,
    session: Session = Depends(require_dashboard_session),
):
    if section not in DASHBOARD_SECTIONS:
        raise NotFoundError("Page not found")
    return HTMLResponse(render_layout(session, section))
