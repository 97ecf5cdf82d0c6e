"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, reference normalization
    ├── models.py         # Dataclasses for API entities
    └── {feature}.py      # Feature modules (caching, parsing)

Currently only ``pokeapi/`` exists. Fetch functions return plain dicts or
``None`` when the remote record is missing; they never raise for remote
failures.
"""
