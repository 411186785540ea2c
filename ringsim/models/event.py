"""Event log model."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel


class Severity(str, Enum):
    """Severity class of an event log entry."""

    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


class EventLogItem(BaseModel):
    """A human-readable notification stamped with the simulation clock."""

    id: str
    timestamp: datetime
    message: str
    severity: Severity

    model_config = {"frozen": True}
