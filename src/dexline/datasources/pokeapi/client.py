"""
PokéAPI catalog client.

Low-level HTTP access for the catalog plus reference normalization. Every
lookup goes through :class:`CatalogClient.fetch`, which never raises for
remote failures: a non-success status, a transport error or an undecodable
body all come back as ``None`` (not found).

API docs: https://pokeapi.co/docs/v2
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlsplit

import requests
import structlog

from dexline.config import DEFAULT_BASE_URL
from dexline.datasources.pokeapi.models import ResourceRef
from dexline.services.http import session as default_session

if TYPE_CHECKING:
    from dexline.datasources.pokeapi.models import CatalogRecord

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Resource categories
# ---------------------------------------------------------------------------
POKEMON = "pokemon"
SPECIES = "pokemon-species"
TYPE = "type"
EVOLUTION_CHAIN = "evolution-chain"

_WHITESPACE = re.compile(r"\s+")


def normalize_ref(category: str, value: str | int | ResourceRef) -> ResourceRef:
    """
    Build the canonical reference for a catalog entity.

    Accepts a bare key (``"pikachu"``), a numeric id (``25`` or ``"25"``), a
    relative path (``"pokemon/25/"``) or an absolute URL from any base
    (``"https://pokeapi.co/api/v2/pokemon/25/"``). All forms of the same
    category and key return equal refs.

    Raises:
        ValueError: If the value is empty or names a different category.
    """
    if isinstance(value, ResourceRef):
        if value.category != category:
            msg = f"expected a {category!r} reference, got {value}"
            raise ValueError(msg)
        return value

    text = str(value).strip()
    if "://" in text:
        text = urlsplit(text).path

    segments = [s for s in text.strip("/").split("/") if s]
    if len(segments) >= 2:
        if segments[-2] != category:
            msg = f"expected a {category!r} reference, got {value!r}"
            raise ValueError(msg)
        key = segments[-1]
    elif segments:
        key = segments[0]
    else:
        msg = f"empty {category!r} reference"
        raise ValueError(msg)

    return ResourceRef(category=category, key=key.lower())


def normalize_query(name: str) -> str:
    """
    Turn a display name into its catalog key.

    Lower-cases, collapses whitespace runs into hyphens and drops periods::

        >>> normalize_query("Mr. Mime")
        'mr-mime'
    """
    key = name.strip().lower().replace(".", "")
    return _WHITESPACE.sub("-", key.strip())


class CatalogClient:
    """Fetches raw catalog records over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or default_session

    def url_for(self, ref: ResourceRef) -> str:
        return f"{self.base_url}/{ref.category}/{quote(ref.key, safe='')}/"

    def fetch(self, ref: ResourceRef) -> CatalogRecord | None:
        """GET one record; ``None`` on any remote failure."""
        url = self.url_for(ref)
        try:
            resp = self.http.get(url)
        except requests.RequestException as exc:
            logger.warning("catalog_fetch_failed", ref=str(ref), url=url, error=str(exc))
            return None

        if not resp.ok:
            logger.info("catalog_record_missing", ref=str(ref), status=resp.status_code)
            return None

        try:
            data: Any = resp.json()
        except ValueError as exc:
            logger.warning("catalog_bad_payload", ref=str(ref), error=str(exc))
            return None

        if not isinstance(data, dict):
            logger.warning("catalog_bad_payload", ref=str(ref), error="not a JSON object")
            return None
        return data

    __call__ = fetch
