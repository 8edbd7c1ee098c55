# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .event_repository import EventRepository
from .reward_repository import RewardRepository
from .attendance_repository import AttendanceRepository
from .referral_repository import ReferralRepository
from .claim_repository import ClaimRepository

__all__ = [
    "BaseRepository",
    "EventRepository",
    "RewardRepository",
    "AttendanceRepository",
    "ReferralRepository",
    "ClaimRepository",
]
