"""
clarityweb/api/history.py

Purpose: Saved simplification endpoints

- GET    /api/history                  (page, limit, mode, favoritesOnly, search)
- GET    /api/history/favorites
- GET    /api/history/{item_id}
- POST   /api/history/{item_id}/favorite
- DELETE /api/history/{item_id}

Same boundary as the account endpoints: 401 before storage, 404 for
entries the caller does not own, generic 500 for anything else.
"""

from typing import Literal, Optional, Tuple

from bson import ObjectId
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorCollection

from clarityweb.api.deps import get_db_connector, require_api_session, storage_errors
from clarityweb.db.mongo import DatabaseConnector
from clarityweb.schemas.history import DeleteResponse, HistoryPage, SimplificationItem
from clarityweb.schemas.session import Session
from clarityweb.services import history_service, user_service
from clarityweb.utils.constants import HISTORY_DEFAULT_PAGE_SIZE, HISTORY_MAX_PAGE_SIZE

router = APIRouter()


async def _owned_entries(
    connector: DatabaseConnector,
    email: str,
) -> Tuple[AsyncIOMotorCollection, ObjectId]:
    users = await connector.users()
    user_id = await user_service.get_account_id(users, email)
    return await connector.simplifications(), user_id


@router.get("", response_model=HistoryPage)
async def get_history(
    page: int = Query(1, ge=1),
    limit: int = Query(HISTORY_DEFAULT_PAGE_SIZE, ge=1, le=HISTORY_MAX_PAGE_SIZE),
    mode: Optional[Literal["simple", "accessible", "summary", "all"]] = Query(None),
    favorites_only: bool = Query(False, alias="favoritesOnly"),
    search: Optional[str] = Query(None, max_length=200),
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """Lists the signed-in user's simplifications, newest first."""
    email = session.user.email
    with storage_errors("fetching history", email):
        simplifications, user_id = await _owned_entries(connector, email)
        docs, total = await history_service.list_history(
            simplifications,
            user_id,
            page=page,
            limit=limit,
            mode=mode,
            favorites_only=favorites_only,
            search=search,
        )

    return HistoryPage(
        items=[SimplificationItem.from_document(doc) for doc in docs],
        total=total,
        page=page,
        limit=limit,
    )


# Declared before /{item_id} so "favorites" is not read as an id
@router.get("/favorites", response_model=HistoryPage)
async def get_favorites(
    page: int = Query(1, ge=1),
    limit: int = Query(HISTORY_DEFAULT_PAGE_SIZE, ge=1, le=HISTORY_MAX_PAGE_SIZE),
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    email = session.user.email
    with storage_errors("fetching favorites", email):
        simplifications, user_id = await _owned_entries(connector, email)
        docs, total = await history_service.list_history(
            simplifications, user_id, page=page, limit=limit, favorites_only=True
        )

    return HistoryPage(
        items=[SimplificationItem.from_document(doc) for doc in docs],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{item_id}", response_model=SimplificationItem)
async def get_simplification(
    item_id: str,
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    email = session.user.email
    with storage_errors("fetching simplification", email):
        simplifications, user_id = await _owned_entries(connector, email)
        doc = await history_service.get_simplification(simplifications, user_id, item_id)

    return SimplificationItem.from_document(doc)


@router.post("/{item_id}/favorite", response_model=SimplificationItem)
async def toggle_favorite(
    item_id: str,
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """Flips the favorite flag and returns the updated entry."""
    email = session.user.email
    with storage_errors("toggling favorite", email):
        simplifications, user_id = await _owned_entries(connector, email)
        doc = await history_service.toggle_favorite(simplifications, user_id, item_id)

    return SimplificationItem.from_document(doc)


@router.delete("/{item_id}", response_model=DeleteResponse)
async def delete_simplification(
    item_id: str,
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    email = session.user.email
    with storage_errors("deleting simplification", email):
        simplifications, user_id = await _owned_entries(connector, email)
        await history_service.delete_simplification(simplifications, user_id, item_id)

    return DeleteResponse(success=True)
