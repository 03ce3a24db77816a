from typing import List, Optional, Tuple

from sqlalchemy.orm import joinedload

from synciot.models.Alert import Alert, AlertSeverity
from synciot.repositories.base_repository import BaseRepository


class AlertRepository(BaseRepository[Alert]):

    def __init__(self):
        super().__init__(Alert)

    def query_filtered(self, severity: Optional[str], is_resolved: Optional[bool],
                       rover_id: Optional[int], page: int, limit: int) -> Tuple[List[Alert], int]:
        query = self.db.session.query(Alert).options(joinedload(Alert.rover))
        if severity is not None:
            query = query.filter(Alert.severity == severity)
        if is_resolved is not None:
            query = query.filter(Alert.is_resolved == is_resolved)
        if rover_id is not None:
            query = query.filter(Alert.rover_id == rover_id)
        query = query.order_by(Alert.created_at.desc(), Alert.id.desc())
        return self.paginate(query, page, limit)

    def critical_unresolved(self, limit: int = 5) -> List[Alert]:
        return self.db.session.query(Alert).options(joinedload(Alert.rover)).filter(
            Alert.severity == AlertSeverity.CRITICAL.value,
            Alert.is_resolved.is_(False),
        ).order_by(Alert.created_at.desc(), Alert.id.desc()).limit(limit).all()

    def recent_for_rover(self, rover_id: int, limit: int = 5) -> List[Alert]:
        return self.db.session.query(Alert).filter(
            Alert.rover_id == rover_id
        ).order_by(Alert.created_at.desc(), Alert.id.desc()).limit(limit).all()
