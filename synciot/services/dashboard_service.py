import logging
from datetime import datetime, timedelta
from typing import Any, Dict

from synciot.models.Alert import Alert
from synciot.models.Command import RoverCommand, CommandStatus
from synciot.repositories.alert_repository import AlertRepository
from synciot.repositories.command_repository import CommandRepository
from synciot.repositories.rover_repository import RoverRepository
from synciot.repositories.sensor_log_repository import SensorLogRepository
from synciot.services.aggregation_service import round1
from synciot.utils.clock import utcnow
from synciot.utils.decorators.decorators import translate_store_errors

logger = logging.getLogger(__name__)


class DashboardService:

    def __init__(self):
        self.rovers = RoverRepository()
        self.sensor_logs = SensorLogRepository()
        self.commands = CommandRepository()
        self.alerts = AlertRepository()

    def _commands_last_days(self, now: datetime, days: int = 7):
        """Contagem diária de comandos (UTC) dos últimos `days` dias, incluindo hoje."""
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        series = []
        for offset in range(days - 1, -1, -1):
            start = today - timedelta(days=offset)
            series.append({
                "date": start.date().isoformat(),
                "count": self.commands.count_between(start, start + timedelta(days=1)),
            })
        return series

    @translate_store_errors
    def stats(self, now: datetime = None) -> Dict[str, Any]:
        now = now or utcnow()
        by_status = self.rovers.count_by_status()
        total_rovers = sum(by_status.values())
        avg_battery = self.rovers.average_battery() or 0

        latest = self.sensor_logs.latest()

        return {
            "overview": {
                "total_rovers": total_rovers,
                "active_rovers": by_status["online"],
                "total_readings": self.sensor_logs.count(),
                "avg_battery": round1(float(avg_battery)),
                "connectivity": {
                    "online": by_status["online"],
                    "offline": by_status["offline"],
                    "error": by_status["error"],
                    "total": total_rovers,
                },
            },
            "commands": {
                "total": self.commands.count(),
                "pending": self.commands.count(RoverCommand.status == CommandStatus.PENDING.value),
                "completed": self.commands.count(RoverCommand.status == CommandStatus.COMPLETED.value),
                "last_7_days": self._commands_last_days(now),
            },
            "alerts": {
                "total": self.alerts.count(),
                "active": self.alerts.count(Alert.is_resolved.is_(False)),
                "resolved": self.alerts.count(Alert.is_resolved.is_(True)),
                "critical": [a.to_dict(include_rover=True) for a in self.alerts.critical_unresolved(5)],
            },
            "latest_reading": latest.to_dict(include_rover=True) if latest else None,
            "timestamp": now.isoformat(),
        }
