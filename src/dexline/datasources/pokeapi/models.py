"""Catalog data models: resource references, evolution nodes, localized text."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

#: Decoded JSON document for one catalog entity. Treated as read-only.
CatalogRecord = dict[str, Any]

# =============================================================================
# Errors
# =============================================================================


class RecordNotFoundError(LookupError):
    """A record a query depends on is absent from the catalog."""

    def __init__(self, ref: ResourceRef | str, reason: str = "not found") -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"{ref}: {reason}")


class LocalizationError(RecordNotFoundError):
    """None of the configured languages is present in a localized list."""


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True, order=True)
class ResourceRef:
    """Normalized identifier of a catalog entity (``category/key``).

    Build these with :func:`dexline.datasources.pokeapi.client.normalize_ref`
    so bare names, numeric ids and absolute URLs collapse to one value.
    """

    category: str
    key: str

    @property
    def path(self) -> str:
        """Relative API path, e.g. ``pokemon-species/25/``."""
        return f"{self.category}/{self.key}/"

    def __str__(self) -> str:
        return f"{self.category}/{self.key}"


@dataclass(frozen=True)
class EvolutionNode:
    """One species in an evolution tree and the forms it evolves into."""

    species: ResourceRef
    name: str
    evolves_to: tuple[EvolutionNode, ...] = field(default=())

    @property
    def is_leaf(self) -> bool:
        return not self.evolves_to


# =============================================================================
# Localization helpers
# =============================================================================


def localized(
    entries: Iterable[dict[str, Any]] | None,
    languages: Sequence[str],
    field_name: str = "name",
    *,
    owner: ResourceRef | str = "record",
) -> str:
    """
    Pick the display string for the first configured language present.

    Args:
        entries: Localized list from a record (``names``, ``genera``, ...).
            Each entry looks like ``{"name": "...", "language": {"name": "en"}}``.
        languages: Language tags in order of preference.
        field_name: Key holding the display text (``name`` or ``genus``).
        owner: Reference used in the error message.

    Raises:
        LocalizationError: If no preferred language has an entry.
    """
    by_language: dict[str, str] = {}
    for entry in entries or ():
        tag = (entry.get("language") or {}).get("name")
        text = entry.get(field_name)
        if tag and text and tag not in by_language:
            by_language[tag] = text

    for tag in languages:
        if tag in by_language:
            return by_language[tag]

    wanted = ", ".join(languages)
    raise LocalizationError(owner, f"no {field_name} in language(s) {wanted}")
