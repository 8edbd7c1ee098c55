from .identity import CallerContext, IdentityUser
from .event import Event, EventCondition, EventResponse, EventDetailResponse
from .reward import RewardResponse, RewardSummary
from .attendance import AttendanceResponse
from .referral import ReferralResponse
from .claim import ClaimResponse, ClaimHistoryItem, EventClaimGroup
