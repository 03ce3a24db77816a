import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from synciot.db import db
from synciot.models.Rover import iso
from synciot.utils.clock import utcnow


class AlertSeverity(str, enum.Enum):
    INFO = 'info'
    WARNING = 'warning'
    CRITICAL = 'critical'


class AlertType(str, enum.Enum):
    LOW_BATTERY = 'low_battery'
    OBSTACLE_DETECTED = 'obstacle_detected'
    CONNECTION_LOST = 'connection_lost'
    HIGH_TEMPERATURE = 'high_temperature'


class Alert(db.Model):
    __tablename__ = 'alerts'

    id = Column(Integer, primary_key=True)
    rover_id = Column(Integer, ForeignKey('rovers.id', ondelete='CASCADE'), nullable=False)
    type = Column(String(30), nullable=False)
    severity = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_at = Column(DateTime)  # definido uma única vez, ao resolver
    created_at = Column(DateTime, default=utcnow, index=True)

    rover = relationship("Rover", back_populates="alerts")

    def to_dict(self, include_rover=False):
        data = {
            'id': self.id,
            'rover_id': self.rover_id,
            'type': self.type,
            'severity': self.severity,
            'message': self.message,
            'is_resolved': self.is_resolved,
            'resolved_at': iso(self.resolved_at),
            'created_at': iso(self.created_at),
        }
        if include_rover and self.rover is not None:
            data['rover'] = self.rover.summary()
        return data
