"""
In-memory task store backing the task board.

Tasks are immutable records; status changes replace the stored record.
Newest tasks come first, matching how the board shows them.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from marketplace_agent.errors import InputError, InvalidStatusError, TaskNotFoundError
from marketplace_agent.models import Marketplace, Priority, Task, TaskStatus
from marketplace_agent.utils import new_id


class InMemoryTaskStore:
    """List-backed store exposing ``add_task`` and ``update_task_status``."""

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self.logger = logging.getLogger(__name__)
        self.id_factory = id_factory or new_id
        self._tasks: List[Task] = []
        self._lock = threading.Lock()

    def add_task(self, partial: Union[Task, Mapping[str, Any]]) -> Task:
        """
        Store a task, filling in the identifier and any missing defaults.

        Args:
            partial: A Task, or a mapping with at least a ``title``

        Returns:
            The stored task
        """
        if isinstance(partial, Task):
            partial = {
                'id': partial.id,
                'title': partial.title,
                'marketplace': partial.marketplace,
                'status': partial.status,
                'priority': partial.priority,
                'due_date': partial.due_date,
            }

        title = str(partial.get('title') or '').strip()
        if not title:
            raise InputError("A task needs a title.")

        task = Task(
            id=partial.get('id') or self.id_factory(),
            title=title,
            marketplace=Marketplace(partial.get('marketplace') or Marketplace.GENERIC),
            status=_coerce_status(partial.get('status') or TaskStatus.PENDING),
            priority=Priority(partial.get('priority') or Priority.MEDIUM),
            due_date=partial.get('due_date'),
        )

        with self._lock:
            self._tasks.insert(0, task)

        self.logger.debug(f"Added task {task.id}: {task.title}")
        return task

    def update_task_status(self, task_id: str, status: Union[str, TaskStatus]) -> Task:
        new_status = _coerce_status(status)

        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    updated = task.with_status(new_status)
                    self._tasks[index] = updated
                    break
            else:
                raise TaskNotFoundError(f"No task with id '{task_id}'.")

        self.logger.info(f"Task {task_id} moved to {new_status.value}")
        return updated

    def get_task(self, task_id: str) -> Task:
        with self._lock:
            for task in self._tasks:
                if task.id == task_id:
                    return task
        raise TaskNotFoundError(f"No task with id '{task_id}'.")

    def list_tasks(self, marketplace: Optional[Union[str, Marketplace]] = None) -> List[Task]:
        """All tasks, or those for one marketplace. ``generic`` means no filter."""
        with self._lock:
            tasks = list(self._tasks)

        if marketplace is None or Marketplace(marketplace) == Marketplace.GENERIC:
            return tasks
        wanted = Marketplace(marketplace)
        return [task for task in tasks if task.marketplace == wanted]

    def group_by_status(self, marketplace: Optional[Union[str, Marketplace]] = None) -> Dict[TaskStatus, List[Task]]:
        grouped: Dict[TaskStatus, List[Task]] = {status: [] for status in TaskStatus}
        for task in self.list_tasks(marketplace):
            grouped[task.status].append(task)
        return grouped

    def pending_count(self, marketplace: Optional[Union[str, Marketplace]] = None) -> int:
        """Tasks still open: pending plus in progress."""
        grouped = self.group_by_status(marketplace)
        return len(grouped[TaskStatus.PENDING]) + len(grouped[TaskStatus.IN_PROGRESS])

    def __len__(self) -> int:
        return len(self._tasks)


def _coerce_status(status: Union[str, TaskStatus]) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError:
        raise InvalidStatusError(f"Unknown task status '{status}'.") from None
