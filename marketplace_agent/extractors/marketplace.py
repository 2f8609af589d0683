"""Marketplace keyword detection."""

from typing import List, Optional, Tuple

from marketplace_agent.models import Marketplace

# Checked in order, first match wins. Amazon goes first so a clause naming
# several platforms resolves deterministically; the order is a policy choice.
MARKETPLACE_KEYWORDS: List[Tuple[Tuple[str, ...], Marketplace]] = [
    (('amazon', 'asin'), Marketplace.AMAZON),
    (('flipkart',), Marketplace.FLIPKART),
    (('meesho',), Marketplace.MEESHO),
    (('myntra',), Marketplace.MYNTRA),
]

# Platform names accepted after "on" in a listing clause
PLATFORM_NAMES = {
    'amazon': Marketplace.AMAZON,
    'flipkart': Marketplace.FLIPKART,
    'meesho': Marketplace.MEESHO,
    'myntra': Marketplace.MYNTRA,
}


def detect_marketplace(text: str) -> Marketplace:
    """Return the first marketplace mentioned in ``text``, else ``generic``."""
    lower = text.lower()
    for keywords, marketplace in MARKETPLACE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return marketplace
    return Marketplace.GENERIC


def platform_from_name(word: str) -> Optional[Marketplace]:
    """Map a single platform word (e.g. the token after "on") to a marketplace."""
    return PLATFORM_NAMES.get(word.lower().strip('.,!?;:'))
