"""
Domain models for dexline.

Pydantic models for the results the query pipeline hands to renderers and
chat transports.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Summary(BaseModel):
    """Everything one "describe this species" answer needs, already localized."""

    model_config = {"frozen": True}

    pokemon_id: int | None = Field(default=None, description="Catalog id of the pokemon")
    name: str = Field(..., description="Localized species name")
    genus: str = Field(..., description="Localized category, e.g. 'Mouse Pokémon'")
    types: list[str] = Field(default_factory=list, description="Type names, sorted")
    evolution: list[str] = Field(default_factory=list, description="Lineage in pre-order")
    strong: list[str] = Field(default_factory=list)
    weak: list[str] = Field(default_factory=list)
