"""Evolution chains: parse the nested chain record and linearize it."""

from __future__ import annotations

from typing import Any

from dexline.datasources.pokeapi.client import SPECIES, normalize_ref
from dexline.datasources.pokeapi.models import EvolutionNode, ResourceRef


def parse_chain(chain: dict[str, Any]) -> EvolutionNode:
    """
    Build an :class:`EvolutionNode` tree from an ``evolution-chain`` record.

    Args:
        chain: The record's ``chain`` object, i.e.
            ``{"species": {"name", "url"}, "evolves_to": [...]}``.

    Raises:
        KeyError: If a link has no ``species`` entry.
        ValueError: If a species URL points at another category.
    """
    species = chain["species"]
    ref = normalize_ref(SPECIES, species.get("url") or species["name"])
    children = tuple(parse_chain(child) for child in chain.get("evolves_to") or ())
    return EvolutionNode(species=ref, name=species.get("name", ref.key), evolves_to=children)


def flatten(root: EvolutionNode) -> list[EvolutionNode]:
    """
    Linearize an evolution tree: root first, then depth-first pre-order.

    Branches keep their declared order and each child is followed directly by
    its own subtree, so ``root -> {A, B}, A -> {C}`` gives ``[root, A, C, B]``.
    A species seen twice is emitted once.
    """
    ordered: list[EvolutionNode] = []
    seen: set[ResourceRef] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.species in seen:
            continue
        seen.add(node.species)
        ordered.append(node)
        stack.extend(reversed(node.evolves_to))
    return ordered
