"""Evaluation context for conditional rules and article conditions.

The context holds every placeholder value plus computed fields with their
native types (ints and bools), so numeric and boolean operators work on
them directly.
"""

import logging
from collections.abc import Mapping
from typing import Any

from core import CaseData, CaseInsensitiveDict
from template_resolver.children import resolve_children
from template_resolver.registry import get_registry

logger = logging.getLogger(__name__)


def collection_field_suffix(name: str) -> str:
    """'BANKREKENINGEN_KINDEREN' -> 'BankrekeningenKinderen'."""
    return "".join(part.capitalize() for part in name.split("_") if part)


def build_evaluation_context(
    data: CaseData, replacements: Mapping[str, Any] | None = None
) -> CaseInsensitiveDict:
    """Build the context for a case.

    Computed fields:
        AantalKinderen, AantalMinderjarigeKinderen, HeeftKinderen,
        HeeftMinderjarigeKinderen, IsAnoniem, HeeftKinderenUitHuwelijk,
        HeeftKinderenVoorHuwelijk, and Aantal<Collection> /
        Heeft<Collection> for every registered collection.

    Computed fields take precedence over replacements with the same name.
    """
    context = CaseInsensitiveDict(replacements or {})

    children = data.children or []
    minors = data.minor_children
    from_marriage = resolve_children("KINDEREN_UIT_HUWELIJK", data) or []
    before_marriage = resolve_children("KINDEREN_VOOR_HUWELIJK", data) or []

    context["AantalKinderen"] = len(children)
    context["AantalMinderjarigeKinderen"] = len(minors)
    context["HeeftKinderen"] = bool(children)
    context["HeeftMinderjarigeKinderen"] = bool(minors)
    context["IsAnoniem"] = bool(data.is_anonymous)
    context["HeeftKinderenUitHuwelijk"] = bool(from_marriage)
    context["HeeftKinderenVoorHuwelijk"] = bool(before_marriage)

    for definition in get_registry().all_collections():
        suffix = collection_field_suffix(definition.name)
        count = len(definition.load_items(data))
        context[f"Aantal{suffix}"] = count
        context[f"Heeft{suffix}"] = count > 0

    logger.debug(f"Built evaluation context with {len(context)} fields")
    return context
