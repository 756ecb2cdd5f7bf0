"""
clarityweb/api/user.py

Purpose: Account endpoints

- GET   /api/user/onboarding-status
- POST  /api/user/reset-onboarding
- POST  /api/user/complete-onboarding
- GET   /api/user/preferences
- PATCH /api/user/preferences
- POST  /api/user/preferences/reset

Every handler maps faults at its boundary: domain errors pass through,
anything else becomes a generic 500 with the detail logged here.
"""

from fastapi import APIRouter, Depends

from clarityweb.db.mongo import DatabaseConnector
from clarityweb.api.deps import get_db_connector, require_api_session, storage_errors
from clarityweb.schemas.preferences import PreferencesUpdate, UserPreferences
from clarityweb.schemas.response import OnboardingStatusResponse, OnboardingUpdateResponse
from clarityweb.schemas.session import Session
from clarityweb.services import preferences_service, user_service
from clarityweb.utils.constants import MESSAGE_ONBOARDING_RESET

router = APIRouter()


@router.get("/onboarding-status", response_model=OnboardingStatusResponse)
async def onboarding_status(
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """Returns whether the signed-in user finished onboarding."""
    email = session.user.email
    with storage_errors("checking onboarding status", email):
        users = await connector.users()
        completed = await user_service.get_onboarding_status(users, email)

    return OnboardingStatusResponse(onboardingCompleted=completed)


@router.post("/reset-onboarding", response_model=OnboardingUpdateResponse)
async def reset_onboarding(
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """
    Clears the onboarding flag so the wizard shows again.
    """
    email = session.user.email
    with storage_errors("resetting onboarding", email):
        users = await connector.users()
        await user_service.reset_onboarding(users, email)

    return OnboardingUpdateResponse(success=True, message=MESSAGE_ONBOARDING_RESET)


@router.post(
    "/complete-onboarding",
    response_model=OnboardingUpdateResponse,
    response_model_exclude_none=True,
)
async def complete_onboarding(
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    email = session.user.email
    with storage_errors("completing onboarding", email):
        users = await connector.users()
        await user_service.complete_onboarding(users, email)

    return OnboardingUpdateResponse(success=True)


@router.get("/preferences", response_model=UserPreferences)
async def get_preferences(
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """Returns the display preferences, defaults filled in."""
    email = session.user.email
    with storage_errors("fetching preferences", email):
        users = await connector.users()
        preferences = await preferences_service.get_preferences(users, email)

    return preferences


@router.patch("/preferences", response_model=UserPreferences)
async def update_preferences(
    changes: PreferencesUpdate,
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    """
    Updates only the fields present in the body.

    Out-of-range values are rejected with 422 before storage is touched.
    """
    email = session.user.email
    with storage_errors("updating preferences", email):
        users = await connector.users()
        preferences = await preferences_service.update_preferences(users, email, changes)

    return preferences


@router.post("/preferences/reset", response_model=UserPreferences)
async def reset_preferences(
    session: Session = Depends(require_api_session),
    connector: DatabaseConnector = Depends(get_db_connector),
):
    email = session.user.email
    with storage_errors("resetting preferences", email):
        users = await connector.users()
        preferences = await preferences_service.reset_preferences(users, email)

    return preferences
