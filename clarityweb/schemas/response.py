"""
clarityweb/schemas/response.py

Purpose: JSON response bodies for the user API

- Error envelope shared by every failing endpoint
- Onboarding status and onboarding update acknowledgements
"""

from pydantic import BaseModel
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class OnboardingStatusResponse(BaseModel):
    onboardingCompleted: bool


class OnboardingUpdateResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
