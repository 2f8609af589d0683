"""
Task synthesis for listing commands.

This module turns a task-intent command into one structured task per
actionable clause. Each clause is read with a small token grammar:

    <action verb> [article] <product phrase> [on <platform>]

The grammar consumes tokens left to right so every stage can be inspected
and tested on its own, and it never raises: anything it cannot read falls
back to defaults.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from nltk.tokenize import WhitespaceTokenizer

from marketplace_agent.extractors.dates import extract_due_date
from marketplace_agent.extractors.marketplace import detect_marketplace, platform_from_name
from marketplace_agent.extractors.segmenter import normalize, segment
from marketplace_agent.models import Marketplace, Priority, Task, TaskStatus
from marketplace_agent.utils import new_id, smart_capitalize

ACTION_KEYWORDS = ('list', 'upload', 'add', 'create')
ARTICLES = ('a', 'an', 'the')
URGENCY_KEYWORDS = ('urgent',)

DEFAULT_PRODUCT_NAME = 'Product Listing'
DEFAULT_TITLE_TEMPLATE = 'Prepare listing for {product}'


@dataclass(frozen=True)
class ListingClause:
    """Result of reading one clause with the listing grammar."""
    verb: Optional[str] = None
    product: Optional[str] = None
    platform: Optional[Marketplace] = None


def _bare(token: str) -> str:
    return token.strip('.,!?;:')


class TaskExtractor:
    """
    Rule-based task synthesizer for marketplace listing commands.
    """

    def __init__(self, config: Optional[Dict] = None, id_factory: Optional[Callable[[], str]] = None):
        """
        Initialize the task extractor.

        Args:
            config: Task extraction settings (default product name, title
                template, largest relative-day offset)
            id_factory: Callable producing task identifiers
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)
        self.id_factory = id_factory or new_id
        self.tokenizer = WhitespaceTokenizer()

        self.default_product_name = self.config.get('default_product_name', DEFAULT_PRODUCT_NAME)
        self.title_template = self.config.get('title_template', DEFAULT_TITLE_TEMPLATE)
        self.max_relative_days = self.config.get('max_relative_days', 99)

    def extract_tasks(self, prompt: str, now: datetime) -> List[Task]:
        """
        Synthesize tasks from a task-intent command.

        Args:
            prompt: Original command text
            now: Reference instant for due-date resolution

        Returns:
            Non-empty list of tasks in clause order; a single fallback task
            when no clause carries a listing action
        """
        normalized = normalize(prompt)
        default_marketplace = detect_marketplace(normalized)
        priority = self._extract_priority(normalized)
        # Dates are read from the whole prompt, so every task shares one
        due_date = extract_due_date(prompt, now, self.max_relative_days)

        tasks = []
        for clause in segment(normalized):
            if not self.is_actionable(clause):
                continue

            parsed = self.parse_clause(clause)
            product = smart_capitalize(parsed.product) if parsed.product else self.default_product_name
            tasks.append(Task(
                id=self.id_factory(),
                title=self.title_template.format(product=product),
                marketplace=self._resolve_marketplace(clause, parsed, default_marketplace),
                status=TaskStatus.PENDING,
                priority=priority,
                due_date=due_date,
            ))
            self.logger.debug(f"Clause '{clause}' -> {parsed}")

        if not tasks:
            self.logger.debug("No actionable clause found, using fallback task")
            tasks.append(Task(
                id=self.id_factory(),
                title=smart_capitalize(prompt.strip()),
                marketplace=default_marketplace,
                status=TaskStatus.PENDING,
                priority=priority,
                due_date=due_date,
            ))

        self.logger.info(f"Synthesized {len(tasks)} task(s)")
        return tasks

    @staticmethod
    def is_actionable(clause: str) -> bool:
        """A clause qualifies when it contains any listing action keyword."""
        return any(keyword in clause for keyword in ACTION_KEYWORDS)

    def parse_clause(self, clause: str) -> ListingClause:
        """Read ``clause`` as verb, optional article, product phrase, optional platform."""
        tokens = self.tokenizer.tokenize(clause)

        verb_index = self._find_verb(tokens)
        if verb_index is None:
            return ListingClause(platform=self._find_platform(tokens)[1])

        position = verb_index + 1
        if position < len(tokens) and tokens[position] in ARTICLES:
            position += 1

        phrase = tokens[position:]
        cut, platform = self._find_platform(phrase)
        if cut is not None:
            phrase = phrase[:cut]

        product = ' '.join(phrase).rstrip('.!?').strip()
        return ListingClause(
            verb=_bare(tokens[verb_index]),
            product=product or None,
            platform=platform,
        )

    @staticmethod
    def _find_verb(tokens: List[str]) -> Optional[int]:
        for index, token in enumerate(tokens):
            if _bare(token) in ACTION_KEYWORDS:
                return index
        return None

    @staticmethod
    def _find_platform(tokens: List[str]):
        """Locate the first "on <platform>" pair; returns (index of "on", marketplace)."""
        for index in range(len(tokens) - 1):
            if tokens[index] != 'on':
                continue
            platform = platform_from_name(tokens[index + 1])
            if platform is not None:
                return index, platform
        return None, None

    @staticmethod
    def _resolve_marketplace(
        clause: str,
        parsed: ListingClause,
        default: Marketplace
    ) -> Marketplace:
        """Explicit "on <platform>" beats a clause-level mention, which beats the command default."""
        if parsed.platform is not None:
            return parsed.platform

        clause_marketplace = detect_marketplace(clause)
        if clause_marketplace != Marketplace.GENERIC:
            return clause_marketplace

        return default

    @staticmethod
    def _extract_priority(normalized: str) -> Priority:
        if any(keyword in normalized for keyword in URGENCY_KEYWORDS):
            return Priority.HIGH
        return Priority.MEDIUM
