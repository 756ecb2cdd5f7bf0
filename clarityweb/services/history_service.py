"""
clarityweb/services/history_service.py

Purpose: Saved simplification storage operations

- List an account's simplifications newest first, with filters and paging
- Read, favorite/unfavorite and delete a single entry
- Every query is scoped by userId, so an entry owned by someone else
  reads exactly like one that does not exist
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from clarityweb.core.exceptions import NotFoundError
from clarityweb.core.logging import get_logger
from clarityweb.utils.constants import ERROR_SIMPLIFICATION_NOT_FOUND, HISTORY_DEFAULT_PAGE_SIZE

logger = get_logger(__name__)

ALL_MODES = "all"


def _entry_filter(user_id: ObjectId, item_id: str) -> Dict[str, Any]:
    # a malformed id cannot match anything
    if not ObjectId.is_valid(item_id):
        raise NotFoundError(ERROR_SIMPLIFICATION_NOT_FOUND)
    return {"_id": ObjectId(item_id), "userId": user_id}


def build_history_query(
    user_id: ObjectId,
    mode: Optional[str] = None,
    favorites_only: bool = False,
    search: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Builds the Mongo filter for a history listing.

    Args:
        user_id: Owning account id
        mode: Only this simplification mode; None or "all" for every mode
        favorites_only: Only entries marked as favorite
        search: Case-insensitive substring of the original or simplified text
    """
    query: Dict[str, Any] = {"userId": user_id}

    if mode and mode != ALL_MODES:
        query["mode"] = mode

    if favorites_only:
        query["isFavorite"] = True

    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query["$or"] = [
            {"originalText": pattern},
            {"simplifiedText": pattern},
        ]

    return query


async def list_history(
    simplifications: AsyncIOMotorCollection,
    user_id: ObjectId,
    page: int = 1,
    limit: int = HISTORY_DEFAULT_PAGE_SIZE,
    mode: Optional[str] = None,
    favorites_only: bool = False,
    search: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Returns one page of entries and the total number of matches.

    Pages are 1-based; a page past the end is empty, not an error.
    """
    query = build_history_query(user_id, mode, favorites_only, search)

    total = await simplifications.count_documents(query)
    cursor = (
        simplifications.find(query)
        .sort("createdAt", DESCENDING)
        .skip((page - 1) * limit)
        .limit(limit)
    )
    items = await cursor.to_list(length=limit)

    logger.debug(f"History page {page}: {len(items)} of {total} entries")
    return items, total


async def get_simplification(
    simplifications: AsyncIOMotorCollection,
    user_id: ObjectId,
    item_id: str,
) -> Dict[str, Any]:
    doc = await simplifications.find_one(_entry_filter(user_id, item_id))
    if doc is None:
        raise NotFoundError(ERROR_SIMPLIFICATION_NOT_FOUND)
    return doc


async def toggle_favorite(
    simplifications: AsyncIOMotorCollection,
    user_id: ObjectId,
    item_id: str,
) -> Dict[str, Any]:
    """
    Flips isFavorite and returns the updated entry.

    The flip runs server-side as one update, so two concurrent toggles
    never both read the same old value. A missing flag counts as False.
    """
    doc = await simplifications.find_one_and_update(
        _entry_filter(user_id, item_id),
        [{"$set": {"isFavorite": {"$not": ["$isFavorite"]}}}],
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFoundError(ERROR_SIMPLIFICATION_NOT_FOUND)

    logger.info(f"Favorite set to {doc.get('isFavorite')} for {item_id}")
    return doc


async def delete_simplification(
    simplifications: AsyncIOMotorCollection,
    user_id: ObjectId,
    item_id: str,
) -> None:
    result = await simplifications.delete_one(_entry_filter(user_id, item_id))
    if result.deleted_count == 0:
        raise NotFoundError(ERROR_SIMPLIFICATION_NOT_FOUND)

    logger.info(f"Simplification {item_id} deleted")
