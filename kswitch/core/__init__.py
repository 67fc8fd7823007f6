"""Core of kswitch: fuzzy matching, the selection state machine and its collaborators."""

from kswitch.core.annotations import Annotations
from kswitch.core.matcher import ScoredEntry, rank, score, searchable_text
from kswitch.core.selector import Outcome, Row, Selector, SelectorConfig

__all__ = [
    "Annotations",
    "Outcome",
    "Row",
    "ScoredEntry",
    "Selector",
    "SelectorConfig",
    "rank",
    "score",
    "searchable_text",
]
