from .Users import User, UserRole
from .Rover import Rover, RoverStatus
from .Sensor import Sensor
from .SensorLog import SensorLog
from .Command import RoverCommand, CommandStatus, VALID_COMMANDS
from .Alert import Alert, AlertSeverity, AlertType

__all__ = [
    "User",
    "UserRole",
    "Rover",
    "RoverStatus",
    "Sensor",
    "SensorLog",
    "RoverCommand",
    "CommandStatus",
    "VALID_COMMANDS",
    "Alert",
    "AlertSeverity",
    "AlertType",
]
