"""
clarityweb/schemas/preferences.py

Purpose: Display preference payloads

- UserPreferences: the full stored set, with defaults for anything unset
- PreferencesUpdate: a partial change; omitted fields stay as they are
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from clarityweb.schemas.history import SimplificationMode

Theme = Literal["normal", "high-contrast", "dark", "cream"]


class UserPreferences(BaseModel):
    fontSize: int = Field(16, ge=12, le=32, description="Font size in px")
    theme: Theme = "normal"
    dyslexiaMode: bool = False
    speechRate: float = Field(1.0, ge=0.5, le=2.0, description="Text-to-speech rate")
    defaultMode: SimplificationMode = "accessible"


class PreferencesUpdate(BaseModel):
    fontSize: Optional[int] = Field(None, ge=12, le=32)
    theme: Optional[Theme] = None
    dyslexiaMode: Optional[bool] = None
    speechRate: Optional[float] = Field(None, ge=0.5, le=2.0)
    defaultMode: Optional[SimplificationMode] = None
