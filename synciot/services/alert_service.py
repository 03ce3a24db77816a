import logging
import math
from typing import Any, Dict, Mapping, Optional

from synciot.models.Alert import Alert, AlertSeverity, AlertType
from synciot.repositories.alert_repository import AlertRepository
from synciot.repositories.rover_repository import RoverRepository
from synciot.utils.clock import utcnow
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

VALID_TYPES = [t.value for t in AlertType]
VALID_SEVERITIES = [s.value for s in AlertSeverity]


class AlertService:

    def __init__(self):
        self.alerts = AlertRepository()
        self.rovers = RoverRepository()

    @translate_store_errors
    def list_alerts(self, severity: Optional[str] = None, is_resolved: Optional[bool] = None,
                    rover_id: Optional[int] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        # severidade inválida é ignorada, não é erro
        if severity not in VALID_SEVERITIES:
            severity = None
        page = max(page, 1)
        limit = max(limit, 1)

        items, total = self.alerts.query_filtered(severity, is_resolved, rover_id, page, limit)
        pages = math.ceil(total / limit)
        return {
            "data": [alert.to_dict(include_rover=True) for alert in items],
            "pagination": {"page": page, "limit": limit, "total": total, "pages": pages},
            "filters": {"severity": severity, "is_resolved": is_resolved, "rover_id": rover_id},
        }

    @translate_store_errors
    def get_alert(self, alert_id: int) -> Alert:
        alert = self.alerts.get_by_id(alert_id)
        if alert is None:
            raise NotFoundError("Alert not found")
        return alert

    @translate_store_errors
    def create_alert(self, payload: Mapping) -> Alert:
        rover_id = payload.get("rover_id")
        alert_type = payload.get("type")
        severity = payload.get("severity")
        message = payload.get("message")

        if not rover_id or not alert_type or not severity or not message:
            raise ValidationError("rover_id, type, severity, and message are required")
        if alert_type not in VALID_TYPES:
            raise ValidationError(f"Invalid type. Valid types are: {', '.join(VALID_TYPES)}")
        if severity not in VALID_SEVERITIES:
            raise ValidationError(f"Invalid severity. Valid severities are: {', '.join(VALID_SEVERITIES)}")

        try:
            rover_id = int(rover_id)
        except (TypeError, ValueError):
            raise ValidationError("rover_id must be an integer")

        rover = self.rovers.get_by_id(rover_id)
        if rover is None:
            raise NotFoundError("Rover not found")

        alert = self.alerts.create(Alert(rover_id=rover.id, type=alert_type, severity=severity, message=message))
        logger.info("Alerta %s (%s) criado para rover %s", alert.type, alert.severity, rover.id)
        return alert

    @translate_store_errors
    def resolve_alert(self, alert_id: int) -> Alert:
        """Marca como resolvido; resolved_at é definido uma única vez."""
        alert = self.get_alert(alert_id)
        if alert.is_resolved:
            raise ConflictError("Alert is already resolved")

        alert.is_resolved = True
        alert.resolved_at = utcnow()
        return self.alerts.update(alert)
