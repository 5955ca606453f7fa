"""Asset collections: investments, vehicles and insurance policies."""

from typing import Any

from core import CaseData
from template_resolver.collections.helpers import (
    effective_value,
    status_field,
    text_field,
    translate_party,
)
from template_resolver.registry import register_collection


@register_collection(
    name="BELEGGINGEN",
    variable_prefix="BELEGGING",
    accessor=lambda data: data.covenant_info.investments if data.covenant_info else None,
    aliases={
        "BELEGGING_INSTELLING": "BELEGGING_INSTITUUT",
        "BELEGGING_STATUS_VERMOGEN": "BELEGGING_STATUS",
    },
    grammar=[
        ("belegging", "beleggingen"),
        ("de belegging", "de beleggingen"),
    ],
    description="Investments (beleggingen)",
)
def map_investment(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "BELEGGING_SOORT": effective_value(item, "soort"),
        "BELEGGING_INSTITUUT": effective_value(item, "instituut"),
        "BELEGGING_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "BELEGGING_STATUS": status_field(item),
    }


@register_collection(
    name="VOERTUIGEN",
    variable_prefix="VOERTUIG",
    accessor=lambda data: data.covenant_info.vehicles if data.covenant_info else None,
    aliases={
        "VOERTUIG_HANDELSBENAMING": "VOERTUIG_MODEL",
        "VOERTUIG_STATUS_VERMOGEN": "VOERTUIG_STATUS",
    },
    grammar=[
        ("voertuig", "voertuigen"),
        ("het voertuig", "de voertuigen"),
    ],
    description="Vehicles (voertuigen)",
)
def map_vehicle(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "VOERTUIG_SOORT": effective_value(item, "soort"),
        "VOERTUIG_KENTEKEN": text_field(item, "kenteken"),
        "VOERTUIG_MERK": text_field(item, "merk"),
        "VOERTUIG_MODEL": text_field(item, "handelsbenaming"),
        "VOERTUIG_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "VOERTUIG_STATUS": status_field(item),
    }


@register_collection(
    name="VERZEKERINGEN",
    variable_prefix="VERZEKERING",
    accessor=lambda data: data.covenant_info.insurances if data.covenant_info else None,
    aliases={
        "VERZEKERING_VERZEKERAAR": "VERZEKERING_MAATSCHAPPIJ",
        "VERZEKERING_VERZEKERINGNEMER": "VERZEKERING_NEMER",
        "VERZEKERING_STATUS_VERMOGEN": "VERZEKERING_STATUS",
    },
    grammar=[
        ("verzekering", "verzekeringen"),
        ("de verzekering", "de verzekeringen"),
        ("polis", "polissen"),
        ("de polis", "de polissen"),
    ],
    description="Insurance policies (verzekeringen)",
)
def map_insurance(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "VERZEKERING_SOORT": effective_value(item, "soort"),
        "VERZEKERING_MAATSCHAPPIJ": effective_value(item, "verzekeringsmaatschappij"),
        "VERZEKERING_NEMER": translate_party(item, "verzekeringnemer", data),
        "VERZEKERING_STATUS": status_field(item),
    }
