"""
clarityweb/services/user_service.py

Purpose: Account status storage operations

- Read the onboarding flag of an account
- Set or clear the onboarding flag
- Resolve an account email to its stored id
- Accounts are keyed by email; nothing here creates or deletes them
"""

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from clarityweb.core.exceptions import NotFoundError
from clarityweb.core.logging import get_logger, LogContext
from clarityweb.utils.constants import ERROR_USER_NOT_FOUND

logger = get_logger(__name__)


async def get_account_id(users: AsyncIOMotorCollection, email: str) -> ObjectId:
    """
    Looks up the _id other collections use to refer to an account.

    Raises:
        NotFoundError: If no account has this email
    """
    user = await users.find_one({"email": email}, {"_id": 1})

    if user is None:
        with LogContext(user_email=email):
            logger.warning("Account lookup for unknown email")
        raise NotFoundError(ERROR_USER_NOT_FOUND)

    return user["_id"]


async def get_onboarding_status(users: AsyncIOMotorCollection, email: str) -> bool:
    """
    Reads the onboarding flag for an account.

    Args:
        users: Users collection
        email: Account email

    Returns:
        The stored flag, False when the field is absent or null

    Raises:
        NotFoundError: If no account has this email
    """
    user = await users.find_one({"email": email}, {"onboardingCompleted": 1})

    if user is None:
        with LogContext(user_email=email):
            logger.warning("Onboarding status requested for unknown account")
        raise NotFoundError(ERROR_USER_NOT_FOUND)

    return bool(user.get("onboardingCompleted") or False)


async def set_onboarding_completed(
    users: AsyncIOMotorCollection,
    email: str,
    completed: bool
) -> None:
    """
    Sets the onboarding flag for an account. Idempotent.

    Args:
        users: Users collection
        email: Account email
        completed: New flag value

    Raises:
        NotFoundError: If no account has this email
    """
    with LogContext(user_email=email):
        result = await users.update_one(
            {"email": email},
            {"$set": {"onboardingCompleted": completed}}
        )

        # matched, not modified: re-setting the same value still counts
        if result.matched_count == 0:
            logger.warning("Onboarding update for unknown account")
            raise NotFoundError(ERROR_USER_NOT_FOUND)

        logger.info(f"Onboarding flag set to {completed}")


async def reset_onboarding(users: AsyncIOMotorCollection, email: str) -> None:
    await set_onboarding_completed(users, email, False)


async def complete_onboarding(users: AsyncIOMotorCollection, email: str) -> None:
    await set_onboarding_completed(users, email, True)
