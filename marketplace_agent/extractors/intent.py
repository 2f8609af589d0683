"""
Top-level intent classification.

Rules are an ordered list of (keywords, intent) pairs evaluated first match
wins; a phrase like "catalog summary" is a catalog request, not analytics.
"""

from typing import List, Tuple

from marketplace_agent.models import Intent

INTENT_RULES: List[Tuple[Tuple[str, ...], Intent]] = [
    (('task', 'to-do', 'listing', 'list the product'), Intent.TASK),
    (('catalog', 'sheet', 'template'), Intent.CATALOG),
    (('performance', 'summary', 'report'), Intent.ANALYTICS),
]


def classify_intent(normalized: str) -> Intent:
    """Classify normalized command text. Pure and deterministic."""
    for keywords, intent in INTENT_RULES:
        if any(keyword in normalized for keyword in keywords):
            return intent
    return Intent.GENERAL
