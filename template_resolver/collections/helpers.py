"""Shared value-resolution rules for collection item mappers.

Mappers must be total over partially filled items: every helper here
returns "" for a missing field instead of raising.
"""

from typing import TYPE_CHECKING, Any

from convenant.utilities.dutch import format_list
from convenant.utilities.formatting import (
    format_currency,
    format_iban,
    humanize_snake_case,
    with_definite_article,
)

if TYPE_CHECKING:
    from core import CaseData, Child

# Primary value that defers to a free-text companion field
OTHER_SENTINELS = {"anders", "other"}

# Tenaamstelling/beneficiary codes that defer to a free-text companion field
CUSTOM_SENTINELS = {"anders", "afwijken"}

PARTY1_CODES = {"partij1", "ouder_1"}
PARTY2_CODES = {"partij2", "ouder_2"}
JOINT_CODES = {"gezamenlijk", "ouders_gezamenlijk"}
JOINT_PHRASE = "beide partijen"

CHILD_CODE_PREFIX = "kind_"
MINOR_CHILDREN_CODE = "kinderen_alle"
ALL_CHILDREN_CODE = "kinderen_allemaal"
GENERIC_CHILD = "het kind"


def text_field(item: dict[str, Any], key: str) -> str:
    """Raw field as display text ('' when missing or null)."""
    value = item.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


def companion_field(field: str) -> str:
    """Name of the free-text field next to a coded field: soort -> soortAnders."""
    return f"{field}Anders"


def effective_value(item: dict[str, Any], field: str, other_field: str | None = None) -> str:
    """Coded value as display text.

    "anders"/"other" takes the companion free text, anything else is
    humanized from snake_case ("doorlopend_krediet" -> "Doorlopend krediet").
    """
    value = text_field(item, field)
    if value.lower() in OTHER_SENTINELS:
        return text_field(item, other_field or companion_field(field))
    return humanize_snake_case(value)


def _child_name(child: "Child") -> str:
    return child.call_name or child.first_names or child.surname or ""


def _party_name(case_data: "CaseData", role: int) -> str:
    party = case_data.party1 if role == 1 else case_data.party2
    if party is None or not party.full_name:
        return f"partij {role}"
    return party.full_name


def translate_party(
    item: dict[str, Any],
    field: str,
    case_data: "CaseData",
    other_field: str | None = None,
) -> str:
    """Translate a tenaamstelling/beneficiary code to readable text.

    partij1/ouder_1 and partij2/ouder_2 give the party's name,
    gezamenlijk gives "beide partijen", kind_<id> the name of that child,
    kinderen_alle the minor children and kinderen_allemaal all children.
    """
    code = text_field(item, field)
    if not code:
        return ""

    lowered = code.lower()
    if lowered in CUSTOM_SENTINELS:
        return text_field(item, other_field or companion_field(field))
    if lowered in PARTY1_CODES:
        return _party_name(case_data, 1)
    if lowered in PARTY2_CODES:
        return _party_name(case_data, 2)
    if lowered in JOINT_CODES:
        return JOINT_PHRASE
    if lowered == MINOR_CHILDREN_CODE:
        return format_list(_child_name(c) for c in case_data.minor_children)
    if lowered == ALL_CHILDREN_CODE:
        return format_list(_child_name(c) for c in case_data.children)
    if lowered.startswith(CHILD_CODE_PREFIX):
        try:
            child = case_data.child_by_id(int(lowered[len(CHILD_CODE_PREFIX) :]))
        except ValueError:
            child = None
        if child is not None and _child_name(child):
            return _child_name(child)
        return GENERIC_CHILD

    return humanize_snake_case(code)


def status_field(item: dict[str, Any]) -> str:
    """statusVermogen humanized ('gemeenschappelijk' -> 'Gemeenschappelijk')."""
    return humanize_snake_case(text_field(item, "statusVermogen"))


def money_field(item: dict[str, Any], field: str) -> str:
    return format_currency(item.get(field))


def iban_field(item: dict[str, Any], field: str = "iban") -> str:
    return format_iban(text_field(item, field))


def institution_field(item: dict[str, Any], field: str) -> str:
    """Institution name with a leading 'de' ('ABN AMRO' -> 'de ABN AMRO')."""
    return with_definite_article(text_field(item, field))
