"""Type effectiveness: merge damage relations of several types into strong/weak.

Pure functions over already-fetched ``type`` records. Fetching the opposing
types is the caller's job (see ``describe.py``): collect the refs with
:func:`collect_opposing_refs`, resolve them, then hand the lookup table to
:func:`classify`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from dexline.analysis.ordered_set import OrderedSet
from dexline.datasources.pokeapi.client import TYPE, normalize_ref
from dexline.datasources.pokeapi.models import (
    CatalogRecord,
    RecordNotFoundError,
    ResourceRef,
    localized,
)

DOUBLE_DAMAGE_FROM = "double_damage_from"
HALF_DAMAGE_FROM = "half_damage_from"
NO_DAMAGE_FROM = "no_damage_from"
DOUBLE_DAMAGE_TO = "double_damage_to"
HALF_DAMAGE_TO = "half_damage_to"
NO_DAMAGE_TO = "no_damage_to"

RELATION_KINDS: tuple[str, ...] = (
    DOUBLE_DAMAGE_FROM,
    HALF_DAMAGE_FROM,
    NO_DAMAGE_FROM,
    DOUBLE_DAMAGE_TO,
    HALF_DAMAGE_TO,
    NO_DAMAGE_TO,
)

WEAK = "weak"
STRONG = "strong"

#: Fixed relation kind -> classification policy.
CLASSIFICATION: dict[str, str] = {
    DOUBLE_DAMAGE_FROM: WEAK,
    HALF_DAMAGE_FROM: STRONG,
    NO_DAMAGE_FROM: STRONG,
    DOUBLE_DAMAGE_TO: WEAK,
    HALF_DAMAGE_TO: STRONG,
    NO_DAMAGE_TO: STRONG,
}


class Classification(BaseModel):
    """Deduplicated display names the types are strong or weak against."""

    strong: list[str] = Field(default_factory=list)
    weak: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.strong and not self.weak


def _relation_entries(membership: CatalogRecord, kind: str) -> list[dict[str, Any]]:
    relations = membership.get("damage_relations") or {}
    return list(relations.get(kind) or [])


def _opposing_ref(entry: dict[str, Any]) -> ResourceRef:
    value = (entry or {}).get("url") or (entry or {}).get("name")
    if not value:
        raise RecordNotFoundError(TYPE, f"damage relation without a reference: {entry!r}")
    try:
        return normalize_ref(TYPE, value)
    except ValueError as exc:
        raise RecordNotFoundError(f"{TYPE}/{value}", str(exc)) from exc


def collect_opposing_refs(memberships: Sequence[CatalogRecord]) -> OrderedSet[ResourceRef]:
    """
    Union of every opposing type referenced under any relation kind.

    Raises:
        RecordNotFoundError: If an entry has no reference or names another
            category.
    """
    refs: OrderedSet[ResourceRef] = OrderedSet()
    for membership in memberships:
        for kind in RELATION_KINDS:
            refs.update(_opposing_ref(entry) for entry in _relation_entries(membership, kind))
    return refs


def relation_names(
    memberships: Sequence[CatalogRecord],
    lookup: Mapping[ResourceRef, CatalogRecord],
    languages: Sequence[str],
) -> dict[str, list[str]]:
    """
    Map each relation kind to the display names of its opposing types.

    Lists keep membership order then entry order and are not deduplicated.

    Raises:
        RecordNotFoundError: If an opposing type is missing from ``lookup``.
        LocalizationError: If an opposing type has no name in ``languages``.
    """
    names: dict[str, list[str]] = {kind: [] for kind in RELATION_KINDS}
    for kind in RELATION_KINDS:
        for membership in memberships:
            for entry in _relation_entries(membership, kind):
                ref = _opposing_ref(entry)
                record = lookup.get(ref)
                if record is None:
                    raise RecordNotFoundError(ref)
                names[kind].append(localized(record.get("names"), languages, owner=ref))
    return names


def classify_names(names: Mapping[str, Sequence[str]]) -> Classification:
    """Fold per-kind name lists into strong/weak, deduplicating at the end."""
    buckets: dict[str, list[str]] = {STRONG: [], WEAK: []}
    for kind in RELATION_KINDS:
        buckets[CLASSIFICATION[kind]].extend(names.get(kind, ()))
    return Classification(
        strong=list(OrderedSet(buckets[STRONG])),
        weak=list(OrderedSet(buckets[WEAK])),
    )


def classify(
    memberships: Sequence[CatalogRecord],
    lookup: Mapping[ResourceRef, CatalogRecord],
    languages: Sequence[str] = ("en",),
) -> Classification:
    """Classify a set of owned types against every type they relate to."""
    return classify_names(relation_names(memberships, lookup, languages))
