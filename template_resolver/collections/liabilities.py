"""Debts and claims (schulden en vorderingen)."""

from typing import Any

from core import CaseData
from template_resolver.collections.helpers import (
    effective_value,
    money_field,
    status_field,
    text_field,
    translate_party,
)
from template_resolver.registry import register_collection

# draagplichtig code meaning the debt is paid off from joint assets
REPAY_CODE = "aflossen"
REPAY_TEXT = "af te lossen"


@register_collection(
    name="SCHULDEN",
    variable_prefix="SCHULD",
    accessor=lambda data: data.covenant_info.debts if data.covenant_info else None,
    aliases={
        "SCHULD_DRAAGPLICHT": "SCHULD_DRAAGPLICHTIG",
        "SCHULD_STATUS_VERMOGEN": "SCHULD_STATUS",
    },
    grammar=[
        ("schuld", "schulden"),
        ("de schuld", "de schulden"),
    ],
    description="Debts (schulden)",
)
def map_debt(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    if text_field(item, "draagplichtig").lower() == REPAY_CODE:
        liable = REPAY_TEXT
    else:
        liable = translate_party(item, "draagplichtig", data)

    return {
        "SCHULD_SOORT": effective_value(item, "soort"),
        "SCHULD_OMSCHRIJVING": text_field(item, "omschrijving"),
        "SCHULD_BEDRAG": money_field(item, "bedrag"),
        "SCHULD_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "SCHULD_DRAAGPLICHTIG": liable,
        "SCHULD_STATUS": status_field(item),
    }


@register_collection(
    name="VORDERINGEN",
    variable_prefix="VORDERING",
    accessor=lambda data: data.covenant_info.claims if data.covenant_info else None,
    aliases={"VORDERING_STATUS_VERMOGEN": "VORDERING_STATUS"},
    grammar=[
        ("vordering", "vorderingen"),
        ("de vordering", "de vorderingen"),
    ],
    description="Claims (vorderingen)",
)
def map_claim(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "VORDERING_SOORT": effective_value(item, "soort"),
        "VORDERING_OMSCHRIJVING": text_field(item, "omschrijving"),
        "VORDERING_BEDRAG": money_field(item, "bedrag"),
        "VORDERING_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "VORDERING_STATUS": status_field(item),
    }
