"""Domain logic over fetched catalog records.

Dependency rule: analysis/ imports datasource *models* and reference helpers
only. It never fetches data and never formats output.

Modules:
  - effectiveness: type damage relations -> strong/weak classification
  - ordered_set: insertion-ordered set used for deduplication
"""

from dexline.analysis.effectiveness import (
    RELATION_KINDS,
    Classification,
    classify,
    classify_names,
    collect_opposing_refs,
    relation_names,
)
from dexline.analysis.ordered_set import OrderedSet

__all__ = [
    "RELATION_KINDS",
    "Classification",
    "OrderedSet",
    "classify",
    "classify_names",
    "collect_opposing_refs",
    "relation_names",
]
