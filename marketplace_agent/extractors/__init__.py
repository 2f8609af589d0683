"""Command interpretation stages: normalization, segmentation, detection and synthesis."""

from .dates import extract_due_date
from .intent import classify_intent
from .marketplace import detect_marketplace
from .segmenter import normalize, segment
from .task_extractor import ListingClause, TaskExtractor

__all__ = [
    'ListingClause',
    'TaskExtractor',
    'classify_intent',
    'detect_marketplace',
    'extract_due_date',
    'normalize',
    'segment',
]
