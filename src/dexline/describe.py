"""
Answer "describe this species" end-to-end.

Composes the catalog cache, lineage flattening and the type effectiveness
reducer into one :class:`~dexline.schemas.Summary`. Independent lookups (type
memberships, lineage species, opposing types) are submitted to the cache
together and gathered in request order.

Any missing dependency aborts the query: :meth:`SpeciesDescriber.describe`
logs the miss and returns ``None``. There are no partial summaries. Unexpected
errors are logged with their traceback and also yield ``None``, so one bad
query never takes down the caller.

Usage::

    describer = SpeciesDescriber.from_settings()
    summary = describer.describe("Mr. Mime")
    if summary is not None:
        print(render_summary(summary))
"""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from dexline.analysis.effectiveness import Classification, classify, collect_opposing_refs
from dexline.config import Settings, get_settings
from dexline.datasources.pokeapi import (
    EVOLUTION_CHAIN,
    POKEMON,
    SPECIES,
    TYPE,
    CatalogClient,
    RecordNotFoundError,
    ResourceCache,
    ResourceRef,
    flatten,
    localized,
    normalize_query,
    normalize_ref,
    parse_chain,
)
from dexline.schemas import Summary
from dexline.services.http import create_session

if TYPE_CHECKING:
    from dexline.datasources.pokeapi import CatalogRecord

logger = structlog.get_logger()


def locale_sort_key(text: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering, ties broken by the raw text."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


class SpeciesDescriber:
    """Query orchestrator bound to one owned :class:`ResourceCache`."""

    def __init__(self, cache: ResourceCache, languages: Sequence[str] = ("en",)) -> None:
        self.cache = cache
        self.languages = tuple(languages)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SpeciesDescriber:
        """Wire a describer to the live catalog using application settings."""
        settings = settings or get_settings()
        client = CatalogClient(
            base_url=settings.base_url,
            http=create_session(timeout=settings.request_timeout),
        )
        cache = ResourceCache(
            client.fetch,
            ttl=settings.cache_ttl_seconds,
            max_workers=settings.max_workers,
        )
        return cls(cache, languages=settings.languages)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def describe(self, query: str) -> Summary | None:
        """Summarize the species named by ``query``, or None if anything is missing."""
        key = normalize_query(query)
        if not key:
            logger.info("empty_query", query=query)
            return None

        try:
            summary = self._describe(key)
        except RecordNotFoundError as exc:
            logger.warning(
                "species_not_described",
                query=query,
                key=key,
                ref=str(exc.ref),
                reason=exc.reason,
            )
            return None
        except Exception:
            logger.exception("query_failed", query=query, key=key)
            return None

        logger.info("query_described", query=query, pokemon_id=summary.pokemon_id, name=summary.name)
        return summary

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def _describe(self, key: str) -> Summary:
        pokemon_ref = self._ref(POKEMON, key)
        pokemon = self._require(self.cache.resolve(pokemon_ref), pokemon_ref)

        # Type lookups run while the species and chain are fetched.
        slots = sorted(pokemon.get("types") or [], key=lambda slot: slot.get("slot", 0))
        type_refs = [self._ref(TYPE, self._link(slot.get("type"))) for slot in slots]
        for ref in type_refs:
            self.cache.submit(ref)

        species_ref = self._ref(SPECIES, self._link(pokemon.get("species")) or pokemon.get("id"))
        species = self._require(self.cache.resolve(species_ref), species_ref)
        name = localized(species.get("names"), self.languages, owner=species_ref)
        genus = localized(species.get("genera"), self.languages, "genus", owner=species_ref)

        chain_ref = self._ref(EVOLUTION_CHAIN, self._link(species.get("evolution_chain")))
        self.cache.submit(chain_ref)

        types = self._gather(type_refs)
        evolution = self._lineage(chain_ref)
        classification = self._effectiveness(types)

        type_names = sorted(
            (localized(t.get("names"), self.languages, owner=ref) for ref, t in zip(type_refs, types)),
            key=locale_sort_key,
        )

        return Summary(
            pokemon_id=pokemon.get("id"),
            name=name,
            genus=genus,
            types=type_names,
            evolution=evolution,
            strong=classification.strong,
            weak=classification.weak,
        )

    def _lineage(self, chain_ref: ResourceRef) -> list[str]:
        chain = self._require(self.cache.resolve(chain_ref), chain_ref)
        try:
            root = parse_chain(chain["chain"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordNotFoundError(chain_ref, f"malformed evolution chain: {exc}") from exc

        nodes = flatten(root)
        refs = [node.species for node in nodes]
        records = self._gather(refs)
        return [
            localized(record.get("names"), self.languages, owner=ref)
            for ref, record in zip(refs, records)
        ]

    def _effectiveness(self, types: list[CatalogRecord]) -> Classification:
        opposing = list(collect_opposing_refs(types))
        records = self._gather(opposing)
        return classify(types, dict(zip(opposing, records)), self.languages)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _link(resource: dict[str, Any] | None) -> str | None:
        """``url`` (or ``name``) of a ``{"name", "url"}`` link object."""
        if not resource:
            return None
        return resource.get("url") or resource.get("name")

    @staticmethod
    def _ref(category: str, value: Any) -> ResourceRef:
        if value is None or value == "":
            raise RecordNotFoundError(category, "no reference in parent record")
        try:
            return normalize_ref(category, value)
        except ValueError as exc:
            raise RecordNotFoundError(f"{category}/{value}", str(exc)) from exc

    @staticmethod
    def _require(record: CatalogRecord | None, ref: ResourceRef) -> CatalogRecord:
        if record is None:
            raise RecordNotFoundError(ref)
        return record

    def _gather(self, refs: Sequence[ResourceRef]) -> list[CatalogRecord]:
        """Resolve every ref, then fail on the first missing record."""
        results = self.cache.resolve_all(refs)
        return [self._require(record, ref) for ref, record in zip(refs, results)]
