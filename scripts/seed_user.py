"""
Development helper - create an account and mint a session cookie for it

Registration and login live outside this service, so local testing of the
dashboard and the user API needs a seeded account plus a signed token:
    python scripts/seed_user.py ada@example.com --name Ada

Paste the printed value into a `next-auth.session-token` cookie.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pymongo import ASCENDING

from clarityweb.core.config import settings
from clarityweb.core.logging import setup_logging, get_logger
from clarityweb.db.mongo import DatabaseConnector
from clarityweb.services.session_service import SessionStore
from clarityweb.utils.constants import SESSION_COOKIE_NAME

setup_logging()
logger = get_logger("scripts.seed_user")


async def seed(email: str, name: str, onboarding_completed: bool):
    connector = DatabaseConnector(settings.MONGODB_URI, settings.MONGODB_DB_NAME)
    try:
        users = await connector.users()

        await users.create_index([("email", ASCENDING)], unique=True, name="idx_email")
        logger.info("✅ Email index ensured (unique)")

        result = await users.update_one(
            {"email": email},
            {
                "$set": {"name": name, "onboardingCompleted": onboarding_completed},
                "$setOnInsert": {"email": email},
            },
            upsert=True,
        )
        if result.upserted_id is not None:
            logger.info(f"✅ Account created: {email}")
        else:
            logger.info(f"ℹ️  Account already existed, updated: {email}")
    finally:
        await connector.close()

    store = SessionStore(settings.SESSION_SECRET, settings.SESSION_MAX_AGE_SECONDS)
    print(f"{SESSION_COOKIE_NAME}={store.issue_token(email, name)}")


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("--name", default="")
    parser.add_argument("--onboarded", action="store_true", help="Mark onboarding as completed")
    args = parser.parse_args()

    asyncio.run(seed(args.email.lower(), args.name, args.onboarded))


if __name__ == "__main__":
    main()
