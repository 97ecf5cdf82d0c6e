"""Pure rendering functions: structured data -> text.

All renderers follow the same pattern:
  - Input: pydantic model or dataclass (from describe.py)
  - Output: str
  - No side effects, no I/O

Public API:
  - summary: render_summary, join_clauses

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function::

       from dexline.renderers import render_template

       def render_something(data: Something) -> str:
           return render_template("something.txt.j2", data=data)

2. Create the Jinja2 template in ``templates/{name}.txt.j2``. Templates
   ending in ``.html.j2`` are autoescaped, text templates are not.

3. Add tests: call the function with sample data and assert on the text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(["html.j2", "html"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
