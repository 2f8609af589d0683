"""
Normalization and clause segmentation for raw commands.

A command such as "list shoes and upload bags, add hats" is broken into the
independent clauses "list shoes", "upload bags" and "add hats". Conjunctions
are matched as whole words so product names like "sandals" or "brand" are
never split.
"""

import logging
from typing import List, Optional

from nltk.tokenize import RegexpTokenizer

logger = logging.getLogger(__name__)

CLAUSE_DELIMITERS = r'\band\b|\bthen\b|,|\n'

_clause_tokenizer = RegexpTokenizer(CLAUSE_DELIMITERS, gaps=True)


def normalize(raw: Optional[str]) -> str:
    """Lower-case and trim raw input. ``None`` normalizes to an empty string."""
    if raw is None:
        return ''
    return str(raw).lower().strip()


def segment(normalized: str) -> List[str]:
    """Split normalized text into trimmed, non-empty clauses in source order."""
    clauses = [clause.strip() for clause in _clause_tokenizer.tokenize(normalized)]
    clauses = [clause for clause in clauses if clause]
    logger.debug(f"Segmented command into {len(clauses)} clause(s): {clauses}")
    return clauses
