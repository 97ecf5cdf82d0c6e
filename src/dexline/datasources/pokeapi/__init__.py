"""PokéAPI species catalog data source.

Public API:
  - client: CatalogClient, normalize_ref, normalize_query, category constants
  - cache: ResourceCache (memoized, request-coalescing lookups)
  - lineage: parse_chain, flatten
  - models: ResourceRef, EvolutionNode, CatalogRecord, localized, errors
"""

from dexline.datasources.pokeapi.cache import ResourceCache
from dexline.datasources.pokeapi.client import (
    EVOLUTION_CHAIN,
    POKEMON,
    SPECIES,
    TYPE,
    CatalogClient,
    normalize_query,
    normalize_ref,
)
from dexline.datasources.pokeapi.lineage import flatten, parse_chain
from dexline.datasources.pokeapi.models import (
    CatalogRecord,
    EvolutionNode,
    LocalizationError,
    RecordNotFoundError,
    ResourceRef,
    localized,
)

__all__ = [
    "EVOLUTION_CHAIN",
    "POKEMON",
    "SPECIES",
    "TYPE",
    "CatalogClient",
    "CatalogRecord",
    "EvolutionNode",
    "LocalizationError",
    "RecordNotFoundError",
    "ResourceCache",
    "ResourceRef",
    "flatten",
    "localized",
    "normalize_query",
    "normalize_ref",
    "parse_chain",
]
