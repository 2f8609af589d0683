"""
Core data types for marketplace commands.

Tasks and responses are plain dataclasses; enums subclass ``str`` so they
serialize to their wire values without a custom encoder.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class Marketplace(str, Enum):
    """Supported e-commerce platforms plus the unspecified default."""
    AMAZON = 'amazon'
    FLIPKART = 'flipkart'
    MEESHO = 'meesho'
    MYNTRA = 'myntra'
    GENERIC = 'generic'


class TaskStatus(str, Enum):
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    BLOCKED = 'blocked'
    COMPLETED = 'completed'


class Priority(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class Intent(str, Enum):
    """Top-level category of a command."""
    TASK = 'task'
    CATALOG = 'catalog'
    ANALYTICS = 'analytics'
    GENERAL = 'general'


class ResponseType(str, Enum):
    TASK = 'task'
    CATALOG = 'catalog'
    ANALYTICS = 'analytics'
    GENERAL = 'general'
    ERROR = 'error'


@dataclass(frozen=True)
class Task:
    """A unit of marketplace work synthesized from a command."""
    id: str
    title: str
    marketplace: Marketplace = Marketplace.GENERIC
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None

    def with_status(self, status: TaskStatus) -> 'Task':
        """Return a copy of this task with a new status."""
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'title': self.title,
            'marketplace': self.marketplace.value,
            'status': self.status.value,
            'priority': self.priority.value,
        }
        # Absent due dates are omitted rather than sent as null
        if self.due_date is not None:
            data['dueDate'] = self.due_date.isoformat()
        return data


@dataclass
class AgentResponse:
    """
    Envelope returned to the caller for every command.

    ``status_code`` travels out of band (HTTP status, CLI exit code) and is
    not part of the serialized body.
    """
    type: ResponseType
    message: str
    summary: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    status_code: int = 200

    @property
    def is_error(self) -> bool:
        return self.type == ResponseType.ERROR

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'type': self.type.value,
            'message': self.message,
        }
        if self.summary is not None:
            body['summary'] = self.summary
        if self.payload is not None:
            body['payload'] = _serialize(self.payload)
        return body


def _serialize(value: Any) -> Any:
    """Recursively convert tasks, enums and datetimes into JSON-ready values."""
    if isinstance(value, Task):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value
