"""
clarityweb/schemas/history.py

Purpose: Saved simplification payloads

- SimplificationItem: one history entry as the browser sees it
- HistoryPage: one page of entries plus the total match count
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

SimplificationMode = Literal["simple", "accessible", "summary"]


class SimplificationStatistics(BaseModel):
    fleschBefore: float
    fleschAfter: float
    wordsCountBefore: int
    wordsCountAfter: int
    readingTimeBefore: float
    readingTimeAfter: float


class SimplificationItem(BaseModel):
    id: str
    originalText: str
    simplifiedText: str
    mode: SimplificationMode
    sourceUrl: Optional[str] = None
    statistics: Optional[SimplificationStatistics] = None
    isFavorite: bool = False
    createdAt: datetime

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "SimplificationItem":
        """Builds an item from a stored document; the ObjectId becomes a string id."""
        return cls(
            id=str(doc["_id"]),
            originalText=doc["originalText"],
            simplifiedText=doc["simplifiedText"],
            mode=doc["mode"],
            sourceUrl=doc.get("sourceUrl"),
            statistics=doc.get("statistics"),
            isFavorite=bool(doc.get("isFavorite") or False),
            createdAt=doc["createdAt"],
        )


class HistoryPage(BaseModel):
    items: List[SimplificationItem]
    total: int
    page: int
    limit: int


class DeleteResponse(BaseModel):
    success: bool = True
