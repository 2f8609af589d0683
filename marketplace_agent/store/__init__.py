"""Task store collaborator."""

from .task_store import InMemoryTaskStore

__all__ = ['InMemoryTaskStore']
