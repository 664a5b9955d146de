"""
Name resolution: turn a human-supplied name into remote entities.

Two strategies exist on purpose and are not interchangeable:

* ``resolve``: exact (case-insensitive) match wins, otherwise every
  substring match in candidate order. Used for boards and users.
* ``first_substring_match``: first candidate whose name contains the
  query. Used for columns inside a single, already-resolved board.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from weeek_cli.exceptions import AmbiguousError, NotFoundError


def _key_values(candidate: dict, keys: Sequence[str]) -> list[str]:
    values = []
    for key in keys:
        value = candidate.get(key)
        if isinstance(value, str) and value:
            values.append(value.lower())
    return values


def resolve(
    query: str,
    candidates: Iterable[dict[str, Any]],
    *,
    keys: Sequence[str] = ("name",),
) -> list[dict[str, Any]]:
    """Return the candidates matching *query*.

    A single exact match is returned alone even when other candidates
    contain the query. With zero or several exact matches, every
    candidate containing the query is returned, in original order.
    """
    needle = (query or "").lower()
    pool = list(candidates)
    exact = [c for c in pool if needle in _key_values(c, keys)]
    if len(exact) == 1:
        return exact
    return [c for c in pool if any(needle in v for v in _key_values(c, keys))]


def first_substring_match(
    query: str,
    candidates: Iterable[dict[str, Any]],
    *,
    key: str = "name",
) -> dict[str, Any] | None:
    """First candidate whose *key* contains *query*, case-insensitive."""
    needle = (query or "").lower()
    for candidate in candidates:
        value = candidate.get(key)
        if isinstance(value, str) and needle in value.lower():
            return candidate
    return None


def format_matches(matches: Iterable[dict[str, Any]], key: str = "name") -> str:
    return ", ".join(f'"{m.get(key, "?")}" (ID: {m.get("id")})' for m in matches)


def require_single(
    matches: list[dict[str, Any]],
    query: str,
    *,
    kind: str,
    scope: str | None = None,
    key: str = "name",
) -> dict[str, Any]:
    """Reduce a resolve() result to one entity or raise a domain error."""
    where = f" in {scope}" if scope else ""
    if not matches:
        raise NotFoundError(f'[ERROR] {kind.capitalize()} "{query}" not found{where}.', query)
    if len(matches) > 1:
        raise AmbiguousError(
            f"[ERROR] Multiple {kind}s match \"{query}\"{where}: "
            f"{format_matches(matches, key)}. Please be more specific.",
            query,
            matches,
        )
    return matches[0]
