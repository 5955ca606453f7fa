"""Structural loop collections over the children of a case.

These are filtered views on ``CaseData.children`` instead of JSON arrays:

- ALLE_KINDEREN: all children
- MINDERJARIGE_KINDEREN: children with a known age below the adult age
- KINDEREN_UIT_HUWELIJK: born on or after the marriage date
- KINDEREN_VOOR_HUWELIJK: born before the marriage date

Without a marriage date the last two fall back to the covenant flags
``has_children_from_marriage`` / ``has_children_before_marriage``: flag set
means all children, otherwise none.
"""

from collections.abc import Callable

from convenant.utilities.formatting import format_date_long
from core import CaseData, CaseInsensitiveDict, Child

ChildFilter = Callable[[list[Child], CaseData], list[Child]]

# Closed set of per-child variables; only these trigger per-child expansion
CHILD_VARIABLES = frozenset(
    {
        "KIND_VOORNAMEN",
        "KIND_ACHTERNAAM",
        "KIND_GEBOORTEDATUM",
        "KIND_GEBOORTEPLAATS",
        "KIND_ROEPNAAM",
        "KIND_LEEFTIJD",
        "KIND_ERKENNINGSDATUM",
    }
)


def _all_children(children: list[Child], data: CaseData) -> list[Child]:
    return list(children)


def _minor_children(children: list[Child], data: CaseData) -> list[Child]:
    return [c for c in children if c.is_minor]


def _children_from_marriage(children: list[Child], data: CaseData) -> list[Child]:
    info = data.covenant_info
    if info and info.marriage_date:
        return [
            c for c in children if c.birth_date and c.birth_date >= info.marriage_date
        ]
    if info and info.has_children_from_marriage:
        return list(children)
    return []


def _children_before_marriage(children: list[Child], data: CaseData) -> list[Child]:
    info = data.covenant_info
    if info and info.marriage_date:
        return [
            c for c in children if c.birth_date and c.birth_date < info.marriage_date
        ]
    if info and info.has_children_before_marriage:
        return list(children)
    return []


STRUCTURAL_COLLECTIONS: dict[str, ChildFilter] = {
    "ALLE_KINDEREN": _all_children,
    "MINDERJARIGE_KINDEREN": _minor_children,
    "KINDEREN_UIT_HUWELIJK": _children_from_marriage,
    "KINDEREN_VOOR_HUWELIJK": _children_before_marriage,
}


def is_structural(name: str) -> bool:
    return name.upper() in STRUCTURAL_COLLECTIONS


def resolve_children(name: str, data: CaseData) -> list[Child] | None:
    """Children in a structural collection, or None if the name is not one."""
    child_filter = STRUCTURAL_COLLECTIONS.get(name.upper())
    if child_filter is None:
        return None
    return child_filter(data.children or [], data)


def child_variables(child: Child, data: CaseData) -> CaseInsensitiveDict:
    """Per-child variables for one loop iteration."""
    age = child.age
    recognition_date = data.covenant_info.recognition_date if data.covenant_info else None
    return CaseInsensitiveDict(
        {
            "KIND_VOORNAMEN": child.first_names or "",
            "KIND_ACHTERNAAM": child.surname_with_prefix,
            "KIND_GEBOORTEDATUM": format_date_long(child.birth_date),
            "KIND_GEBOORTEPLAATS": child.birth_place or "",
            "KIND_ROEPNAAM": child.call_name or child.first_names or "",
            "KIND_LEEFTIJD": str(age) if age is not None else "",
            "KIND_ERKENNINGSDATUM": format_date_long(recognition_date),
        }
    )
