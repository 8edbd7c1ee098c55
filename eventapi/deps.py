from fastapi import Depends, Request
from sqlalchemy.orm import Session

from eventapi.config import settings
from eventapi.database.session import get_db

# Services
from eventapi.services.attendance_service import AttendanceService
from eventapi.services.claim_service import ClaimService
from eventapi.services.event_service import EventService
from eventapi.services.fulfillment_service import FulfillmentService
from eventapi.services.history_service import HistoryService
from eventapi.services.identity_client import IdentityClient
from eventapi.services.referral_service import ReferralService


def get_identity_client(request: Request) -> IdentityClient:
    container = getattr(request.app, "container", None)
    if container is None:
        return IdentityClient.from_settings(settings)
    return container.services.identity_client()


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(db=db, settings=settings)


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db=db, settings=settings)


def get_referral_service(
    db: Session = Depends(get_db),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> ReferralService:
    return ReferralService(db=db, identity_client=identity_client)


def get_claim_service(db: Session = Depends(get_db)) -> ClaimService:
    return ClaimService(db=db, settings=settings)


def get_fulfillment_service(db: Session = Depends(get_db)) -> FulfillmentService:
    return FulfillmentService(db=db)


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    return HistoryService(db=db)
