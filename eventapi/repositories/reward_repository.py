from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from eventapi.models.reward import Reward as RewardModel
from eventapi.repositories.base import BaseRepository
from eventapi.schemas.reward import RewardCreateRequest, RewardResponse


class RewardRepository(BaseRepository[RewardModel, RewardResponse]):
    """이벤트 보상 저장소"""

    def __init__(self, db: Session):
        super().__init__(RewardModel, RewardResponse, db)

    def get_reward(self, reward_id: str) -> Optional[RewardResponse]:
        return self.get_by_id(reward_id)

    def list_by_event(self, event_id: str) -> List[RewardResponse]:
        query = (
            self.db.query(self.model_class)
            .filter(self.model_class.event_id == event_id)
            .order_by(self.model_class.created_at.asc(), self.model_class.id.asc())
        )
        return self._to_schemas(query.all())

    def create_many(
        self,
        event_id: str,
        items: Iterable[RewardCreateRequest],
        operator_id: str,
    ) -> List[RewardResponse]:
        """한 트랜잭션으로 여러 보상을 등록합니다. 하나라도 실패하면 전부 롤백."""
        instances = [
            self.model_class(
                event_id=event_id,
                name=item.name,
                type=item.type.value,
                quantity=item.quantity,
                unit_value=item.unit_value,
                description=item.description,
                created_by=operator_id,
            )
            for item in items
        ]
        try:
            self.db.add_all(instances)
            self.db.flush()
            for instance in instances:
                self.db.refresh(instance)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self._to_schemas(instances)

    def update_reward(self, reward_id: str, **fields) -> Optional[RewardResponse]:
        return self.update(reward_id, **fields)
