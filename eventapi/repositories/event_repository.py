from typing import List, Optional

from sqlalchemy.orm import Session

from eventapi.models.event import Event as EventModel, EventStatus
from eventapi.repositories.base import BaseRepository
from eventapi.schemas.event import Event as EventSchema


class EventRepository(BaseRepository[EventModel, EventSchema]):
    """이벤트 저장소"""

    def __init__(self, db: Session):
        super().__init__(EventModel, EventSchema, db)

    def get_event(self, event_id: str) -> Optional[EventSchema]:
        return self.get_by_id(event_id)

    def create_event(self, commit: bool = True, **fields) -> EventSchema:
        return self.create(commit=commit, **fields)

    def update_event(self, event_id: str, **fields) -> Optional[EventSchema]:
        return self.update(event_id, **fields)

    def list_events(
        self,
        status: Optional[EventStatus] = None,
        include_inactive: bool = True,
    ) -> List[EventSchema]:
        """생성일 내림차순 이벤트 목록"""
        query = self.db.query(self.model_class)
        if status is not None:
            query = query.filter(self.model_class.status == EventStatus(status).value)
        if not include_inactive:
            query = query.filter(self.model_class.status != EventStatus.INACTIVE.value)
        query = query.order_by(
            self.model_class.created_at.desc(), self.model_class.id.desc()
        )
        return self._to_schemas(query.all())
