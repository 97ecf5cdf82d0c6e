"""dexline - one-line species summaries aggregated from the PokéAPI catalog.

Architecture::

    datasources/   Catalog API (ResourceRef normalization, memoizing cache, lineage)
    analysis/      Pure logic over fetched records (type effectiveness)
    renderers/     Pure data -> text (summary line)
    describe.py    Query orchestration (fan-out lookups, NotFound handling)
    chat.py        Chat command dispatch and sender permission checks
    services/      Shared utilities (HTTP session)

Data flow: chat/cli -> describe -> cache (datasources) -> analysis -> renderers
"""

__version__ = "0.1.0"
