"""
Command agent: the single entry point from a raw utterance to a response.

The agent normalizes the prompt, classifies its intent, routes it to the
matching builder and converts every failure into an ``error`` response.
It keeps no state between commands apart from the optional task store it
hands synthesized tasks to.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from marketplace_agent.agents.responses import (
    build_analytics_response,
    build_catalog_response,
    build_error_response,
    build_general_response,
    build_task_response,
)
from marketplace_agent.errors import AgentError, InputError, InternalError
from marketplace_agent.extractors.intent import classify_intent
from marketplace_agent.extractors.segmenter import normalize
from marketplace_agent.extractors.task_extractor import TaskExtractor
from marketplace_agent.models import AgentResponse, Intent, Task
from marketplace_agent.store import InMemoryTaskStore


class CommandAgent:
    """
    Routes seller commands to task, catalog, analytics or general handling.
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        task_store: Optional[InMemoryTaskStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the command agent.

        Args:
            config: Full settings dictionary (see ``Settings.to_dict``)
            task_store: Store that receives synthesized tasks, if any
            clock: Source of the reference instant when a caller passes none
            id_factory: Identifier generator for synthesized tasks
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)
        self.task_store = task_store
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.task_extractor = TaskExtractor(self.config.get('task_extraction', {}), id_factory=id_factory)

    def process_command(
        self,
        prompt: Optional[str],
        context: Any = None,
        now: Optional[datetime] = None
    ) -> AgentResponse:
        """
        Interpret a command and build its response. Never raises.

        Args:
            prompt: Raw command text
            context: Opaque data echoed back for catalog requests
            now: Reference instant for due dates; defaults to the agent clock

        Returns:
            AgentResponse; ``status_code`` is 400 for a missing prompt and 500
            for internal failures
        """
        try:
            return self.interpret(prompt, context, now)
        except AgentError as e:
            self.logger.warning(f"Command rejected: {e.message}")
            return build_error_response(e)
        except Exception as e:
            self.logger.error(f"Command processing failed: {e}", exc_info=True)
            return build_error_response(InternalError(str(e) or None))

    def interpret(
        self,
        prompt: Optional[str],
        context: Any = None,
        now: Optional[datetime] = None
    ) -> AgentResponse:
        """Like ``process_command`` but raises ``InputError`` and lets failures propagate."""
        if prompt is None or not str(prompt).strip():
            raise InputError()

        prompt = str(prompt)
        normalized = normalize(prompt)
        intent = classify_intent(normalized)
        self.logger.info(f"Routing command as '{intent.value}'")
        self.logger.debug(f"Command text: {prompt!r}")

        if intent == Intent.TASK:
            tasks = self.task_extractor.extract_tasks(prompt, now or self.clock())
            return build_task_response(self._record_tasks(tasks))
        if intent == Intent.CATALOG:
            return build_catalog_response(context)
        if intent == Intent.ANALYTICS:
            return build_analytics_response()
        return build_general_response()

    def _record_tasks(self, tasks: List[Task]) -> List[Task]:
        if self.task_store is None:
            return tasks
        return [self.task_store.add_task(task) for task in tasks]
