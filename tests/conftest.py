"""
Shared fixtures: a call-counting stub catalog with the Pikachu family.

Records mirror the PokéAPI v2 shapes closely enough for the pipeline
(``names``, ``genera``, ``types``, ``damage_relations``, ``chain``).
"""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Iterator
from typing import Any

import pytest

from dexline.datasources.pokeapi import ResourceCache, ResourceRef
from dexline.describe import SpeciesDescriber

API = "https://pokeapi.co/api/v2"


def link(category: str, key: str | int, name: str | None = None) -> dict[str, str]:
    """A ``{"name", "url"}`` link object as the API returns it."""
    return {"name": name or str(key), "url": f"{API}/{category}/{key}/"}


def names(en: str, **others: str) -> list[dict[str, Any]]:
    entries = [{"name": en, "language": {"name": "en", "url": f"{API}/language/9/"}}]
    for tag, text in others.items():
        entries.append({"name": text, "language": {"name": tag}})
    return entries


def type_record(
    type_id: int, name: str, display: str, **relations: list[dict[str, str]]
) -> dict[str, Any]:
    kinds = (
        "double_damage_from",
        "half_damage_from",
        "no_damage_from",
        "double_damage_to",
        "half_damage_to",
        "no_damage_to",
    )
    return {
        "id": type_id,
        "name": name,
        "names": names(display, ja=display.upper()),
        "damage_relations": {kind: relations.get(kind, []) for kind in kinds},
    }


def species_record(
    species_id: int, name: str, display: str, genus: str, chain_id: int = 10
) -> dict[str, Any]:
    return {
        "id": species_id,
        "name": name,
        "names": names(display, ja=f"{display}-ja"),
        "genera": [
            {"genus": genus, "language": {"name": "en"}},
            {"genus": f"{genus}-ja", "language": {"name": "ja"}},
        ],
        "evolution_chain": {"url": f"{API}/evolution-chain/{chain_id}/"},
    }


TYPE_IDS = {
    "flying": 3,
    "ground": 5,
    "steel": 9,
    "water": 11,
    "grass": 12,
    "electric": 13,
    "dragon": 16,
}


def t(name: str) -> dict[str, str]:
    return link("type", TYPE_IDS[name], name)


def build_catalog() -> dict[ResourceRef, dict[str, Any]]:
    electric = type_record(
        13,
        "electric",
        "Electric",
        double_damage_from=[t("ground")],
        half_damage_from=[t("flying"), t("steel"), t("electric")],
        no_damage_from=[],
        double_damage_to=[t("flying"), t("water")],
        half_damage_to=[t("grass"), t("electric"), t("dragon")],
        no_damage_to=[t("ground")],
    )
    records: dict[ResourceRef, dict[str, Any]] = {
        ResourceRef("pokemon", "pikachu"): {
            "id": 25,
            "name": "pikachu",
            "species": link("pokemon-species", 25, "pikachu"),
            "types": [{"slot": 1, "type": t("electric")}],
        },
        ResourceRef("pokemon-species", "25"): species_record(25, "pikachu", "Pikachu", "Mouse Pokémon"),
        ResourceRef("pokemon-species", "172"): species_record(172, "pichu", "Pichu", "Tiny Mouse Pokémon"),
        ResourceRef("pokemon-species", "26"): species_record(26, "raichu", "Raichu", "Mouse Pokémon"),
        ResourceRef("evolution-chain", "10"): {
            "id": 10,
            "chain": {
                "species": link("pokemon-species", 172, "pichu"),
                "evolves_to": [
                    {
                        "species": link("pokemon-species", 25, "pikachu"),
                        "evolves_to": [
                            {"species": link("pokemon-species", 26, "raichu"), "evolves_to": []}
                        ],
                    }
                ],
            },
        },
        ResourceRef("type", "13"): electric,
    }
    for name, type_id in TYPE_IDS.items():
        if name != "electric":
            records[ResourceRef("type", str(type_id))] = type_record(
                type_id, name, name.capitalize()
            )
    return records


class StubCatalog:
    """In-memory fetcher that counts every call per ref."""

    def __init__(self, records: dict[ResourceRef, dict[str, Any]] | None = None) -> None:
        self.records = build_catalog() if records is None else records
        self.calls: Counter[ResourceRef] = Counter()
        self._lock = threading.Lock()

    def __call__(self, ref: ResourceRef) -> dict[str, Any] | None:
        with self._lock:
            self.calls[ref] += 1
        return self.records.get(ref)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def catalog() -> StubCatalog:
    return StubCatalog()


@pytest.fixture
def cache(catalog: StubCatalog) -> Iterator[ResourceCache]:
    with ResourceCache(catalog, max_workers=4) as c:
        yield c


@pytest.fixture
def describer(cache: ResourceCache) -> SpeciesDescriber:
    return SpeciesDescriber(cache, languages=["en"])
