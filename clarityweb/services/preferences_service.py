"""
clarityweb/services/preferences_service.py

Purpose: Display preference storage operations

- Preferences live on the account document under `preferences`
- Reads fill unset fields with defaults
- Updates touch only the fields given; reset writes the full default set
"""

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from clarityweb.core.exceptions import NotFoundError, ValidationError
from clarityweb.core.logging import get_logger, LogContext
from clarityweb.schemas.preferences import PreferencesUpdate, UserPreferences
from clarityweb.utils.constants import ERROR_NO_PREFERENCES, ERROR_USER_NOT_FOUND

logger = get_logger(__name__)

PREFERENCES_PROJECTION = {"preferences": 1}


def _with_defaults(user: Optional[Dict[str, Any]], email: str) -> UserPreferences:
    if user is None:
        with LogContext(user_email=email):
            logger.warning("Preferences requested for unknown account")
        raise NotFoundError(ERROR_USER_NOT_FOUND)

    stored = user.get("preferences") or {}
    return UserPreferences(**{**UserPreferences().model_dump(), **stored})


async def get_preferences(users: AsyncIOMotorCollection, email: str) -> UserPreferences:
    """
    Reads an account's preferences.

    Raises:
        NotFoundError: If no account has this email
    """
    user = await users.find_one({"email": email}, PREFERENCES_PROJECTION)
    return _with_defaults(user, email)


async def update_preferences(
    users: AsyncIOMotorCollection,
    email: str,
    changes: PreferencesUpdate,
) -> UserPreferences:
    """
    Applies a partial update and returns the resulting preferences.

    Raises:
        ValidationError: If the update names no field
        NotFoundError: If no account has this email
    """
    fields = changes.model_dump(exclude_none=True)
    if not fields:
        raise ValidationError(ERROR_NO_PREFERENCES)

    user = await users.find_one_and_update(
        {"email": email},
        {"$set": {f"preferences.{key}": value for key, value in fields.items()}},
        projection=PREFERENCES_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    preferences = _with_defaults(user, email)

    with LogContext(user_email=email):
        logger.info(f"Preferences updated: {', '.join(sorted(fields))}")
    return preferences


async def reset_preferences(users: AsyncIOMotorCollection, email: str) -> UserPreferences:
    defaults = UserPreferences()
    user = await users.find_one_and_update(
        {"email": email},
        {"$set": {"preferences": defaults.model_dump()}},
        projection=PREFERENCES_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    preferences = _with_defaults(user, email)

    with LogContext(user_email=email):
        logger.info("Preferences reset to defaults")
    return preferences
