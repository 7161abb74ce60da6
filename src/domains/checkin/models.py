# src/domains/checkin/models.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CheckinDrop(BaseModel):
    model_config = ConfigDict(extra="allow")

    date: str
    amount: str
    txHash: Optional[str] = None


class CheckinStatus(BaseModel):
    """Daily check-in status of an account, as reported by the check-in API."""

    model_config = ConfigDict(extra="allow")

    fid: int
    checkedInToday: bool = False
    lastCheckinDate: Optional[str] = None
    totalCheckins: int = 0
    currentStreak: int = 0
    dropHistory: List[CheckinDrop] = []


class CheckinResult(BaseModel):
    """Result of a successful daily check-in."""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    fid: Optional[int] = None
    wallet: Optional[str] = None
    checkinDate: Optional[str] = None
    totalCheckins: Optional[int] = None
    currentStreak: Optional[int] = None
    dropAmount: Optional[str] = None
    dropTxHash: Optional[str] = None
