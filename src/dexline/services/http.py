"""
Shared HTTP client for the catalog API.

Provides a pre-configured ``requests.Session`` with a default timeout and an
explicit no-retry policy. Failed lookups are memoized by the resource cache as
"not found" rather than retried, so the adapter never re-sends a request.

Usage::

    from dexline.services.http import session

    resp = session.get("https://pokeapi.co/api/v2/pokemon/pikachu/")
    if resp.ok:
        data = resp.json()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dexline import __version__

#: Fail-soft policy: one attempt, status handling left to the caller.
DEFAULT_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    redirect=3,
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,
    raise_on_redirect=False,
)

DEFAULT_TIMEOUT = 30  # seconds


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = f"dexline/{__version__}"
    s.headers["Accept"] = "application/json"

    # Inject a default timeout so a stalled catalog call cannot hang a query.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
