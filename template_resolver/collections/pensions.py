"""Pension collection (pensioenen)."""

from typing import Any

from core import CaseData
from convenant.utilities.formatting import humanize_snake_case
from template_resolver.collections.helpers import (
    CUSTOM_SENTINELS,
    effective_value,
    text_field,
    translate_party,
)
from template_resolver.registry import register_collection


def _special_partner_pension(item: dict[str, Any]) -> str:
    """bijzonderPartnerpensioen; "afwijken" takes the agreed free text."""
    value = text_field(item, "bijzonderPartnerpensioen")
    if value.lower() in CUSTOM_SENTINELS:
        return text_field(item, "bijzonderPartnerpensioensAnders")
    return humanize_snake_case(value)


@register_collection(
    name="PENSIOENEN",
    variable_prefix="PENSIOEN",
    accessor=lambda data: data.covenant_info.pensions if data.covenant_info else None,
    aliases={"PENSIOEN_UITVOERDER": "PENSIOEN_MAATSCHAPPIJ"},
    grammar=[
        ("pensioen", "pensioenen"),
        ("het pensioen", "de pensioenen"),
    ],
    description="Pensions (pensioenen)",
)
def map_pension(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "PENSIOEN_MAATSCHAPPIJ": effective_value(item, "pensioenmaatschappij"),
        "PENSIOEN_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "PENSIOEN_VERDELING": effective_value(item, "verdeling"),
        "PENSIOEN_BIJZONDER_PARTNERPENSIOEN": _special_partner_pension(item),
    }
