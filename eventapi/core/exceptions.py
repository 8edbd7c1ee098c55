from fastapi import HTTPException, status
from typing import Optional, Dict, Any

class BaseAPIException(HTTPException):
    """Base exception for API errors"""
    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": self.details
                }
            }
        )

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message

class AuthenticationError(BaseAPIException):
    """Missing or untrusted caller context"""
    def __init__(self, message: str = "Authentication failed", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="AUTH_001",
            message=message,
            details=details
        )

class AuthorizationError(BaseAPIException):
    """Authorization related errors"""
    def __init__(self, message: str = "Access forbidden", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="AUTH_002",
            message=message,
            details=details
        )

class InvalidInputError(BaseAPIException):
    """Malformed id, missing or inconsistent field"""
    def __init__(self, message: str = "Invalid input", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_INPUT",
            message=message,
            details=details
        )

class NotFoundError(BaseAPIException):
    """Resource not found errors"""
    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict] = None,
        error_code: str = "NOT_FOUND_001",
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            message=message,
            details=details
        )

class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: str):
        super().__init__("Event not found", {"event_id": event_id}, "EVENT_NOT_FOUND")

class RewardNotFoundError(NotFoundError):
    def __init__(self, reward_id: str):
        super().__init__("Reward not found", {"reward_id": reward_id}, "REWARD_NOT_FOUND")

class ClaimNotFoundError(NotFoundError):
    def __init__(self, claim_id: str):
        super().__init__("Reward claim not found", {"claim_id": claim_id}, "CLAIM_NOT_FOUND")

class UserNotFoundError(NotFoundError):
    """Identity lookup miss"""
    def __init__(self, message: str = "User not found", details: Optional[Dict] = None):
        super().__init__(message, details, "USER_NOT_FOUND")

class ConflictError(BaseAPIException):
    """Resource conflict errors"""
    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[Dict] = None,
        error_code: str = "CONFLICT_001",
    ):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code=error_code,
            message=message,
            details=details
        )

class AlreadyCheckedInError(ConflictError):
    def __init__(self, user_id: str):
        super().__init__("Already checked in today", {"user_id": user_id}, "ALREADY_CHECKED_IN")

class DuplicateReferralError(ConflictError):
    def __init__(self, message: str = "Invitee has already been referred", details: Optional[Dict] = None):
        super().__init__(message, details, "DUPLICATE_REFERRAL")

class RewardAlreadyClaimedError(ConflictError):
    def __init__(self, event_id: str, reward_id: str):
        super().__init__(
            "Reward already claimed",
            {"event_id": event_id, "reward_id": reward_id},
            "REWARD_ALREADY_CLAIMED",
        )

class InvalidStatusTransitionError(ConflictError):
    def __init__(self, claim_id: str, current: str, requested: str):
        super().__init__(
            f"Cannot change claim status from {current} to {requested}",
            {"claim_id": claim_id, "current_status": current, "requested_status": requested},
            "INVALID_STATUS_TRANSITION",
        )

class InactiveOrOutOfWindowError(BaseAPIException):
    """Event is not ONGOING or now lies outside its window"""
    def __init__(self, error_code: str, message: str, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            details=details
        )

class EventInactiveError(InactiveOrOutOfWindowError):
    def __init__(self, event_id: str, event_status: str):
        super().__init__(
            "EVENT_INACTIVE",
            "Event is not active",
            {"event_id": event_id, "status": event_status},
        )

class EventPeriodError(InactiveOrOutOfWindowError):
    def __init__(self, event_id: str):
        super().__init__(
            "EVENT_PERIOD",
            "Event is not within its period",
            {"event_id": event_id},
        )

class ConditionNotMetError(BaseAPIException):
    """Participation condition is not satisfied"""
    def __init__(self, condition_type: str, threshold: Optional[int], actual: Optional[int] = None):
        self.condition_type = condition_type
        self.threshold = threshold
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="CONDITION_NOT_MET",
            message=f"Condition {condition_type} ({threshold}) is not met",
            details={"condition_type": condition_type, "threshold": threshold, "actual": actual},
        )

class ServiceCommunicationError(BaseAPIException):
    """Identity service transport failure (retryable by the caller)"""
    def __init__(self, message: str = "Failed to communicate with identity service", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="SERVICE_COMMUNICATION_ERROR",
            message=message,
            details=details
        )

class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_001",
            message=message,
            details=details
        )
