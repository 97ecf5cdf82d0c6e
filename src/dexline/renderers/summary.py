"""Render a species Summary as one chat line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dexline.renderers import render_template

if TYPE_CHECKING:
    from dexline.schemas import Summary

TEMPLATE = "summary.txt.j2"


def join_clauses(strong: list[str], weak: list[str]) -> str:
    """
    Build the effectiveness text, omitting any empty clause.

    Returns an empty string when both lists are empty.
    """
    clauses = []
    if strong:
        clauses.append(f"strong against {' & '.join(strong)}")
    if weak:
        clauses.append(f"weak against {' & '.join(weak)}")
    return ", ".join(clauses)


def render_summary(summary: Summary) -> str:
    """``Name (Genus) is T1 & T2 type | Evolution: A -> B | strong against ..., weak against ...``"""
    effectiveness = join_clauses(summary.strong, summary.weak)
    return render_template(TEMPLATE, summary=summary, effectiveness=effectiveness).strip()
