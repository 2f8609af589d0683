"""Data model shared by the interpretation core and its collaborators."""

from .types import (
    AgentResponse,
    Intent,
    Marketplace,
    Priority,
    ResponseType,
    Task,
    TaskStatus,
)

__all__ = [
    'AgentResponse',
    'Intent',
    'Marketplace',
    'Priority',
    'ResponseType',
    'Task',
    'TaskStatus',
]
