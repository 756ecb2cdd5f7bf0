"""
clarityweb/schemas/session.py

Purpose: Authenticated session as seen by request handlers
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SessionUser(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class Session(BaseModel):
    """
    Identity loaded from a verified session token. Read-only for this service.
    """
    user: SessionUser
    expires: datetime
