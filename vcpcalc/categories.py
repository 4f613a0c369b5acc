"""Influence taxonomy of the host game, matched against transaction descriptions."""

from __future__ import annotations

from collections.abc import Iterable


class _MatchAll:
    def __repr__(self) -> str:
        return "ALL"


ALL = _MatchAll()

# "Finanza-" and "Media-" keep the separator: bare "Finanza"/"Media" also name
# non-influence movements on the page.
INFLUENCE_DESCRIPTORS: tuple[str, ...] = (
    "Trasporti",
    "Finanza-",
    "Giustizia",
    "Polizia",
    "Occulto",
    "Burocrazia",
    "Malavita",
    "Politica",
    "Media-",
    "Industria",
    "Strada",
    "Università",
    "Alta Società",
)

PASSIVE_DESCRIPTORS: tuple[str, ...] = ("passive",)


def matches_descriptors(description: str | None, descriptors: object) -> bool:
    if descriptors is ALL:
        return True
    if description is None:
        return False
    haystack = description.lower()
    return any(term.lower() in haystack for term in descriptors)  # type: ignore[union-attr]


def normalize_descriptors(values: Iterable[str] | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if values is None:
        return default
    if isinstance(values, str):
        values = [values]
    return tuple(str(v) for v in values if str(v))
