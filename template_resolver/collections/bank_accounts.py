"""Bank account collections.

BANKREKENINGEN_KINDEREN: children's savings accounts from the parenting
agreements. BANKREKENINGEN: accounts in the division of assets.
Both use the BANKREKENING_ variable prefix.
"""

from typing import Any

from core import CaseData
from template_resolver.collections.helpers import (
    iban_field,
    institution_field,
    money_field,
    status_field,
    translate_party,
)
from template_resolver.registry import register_collection

ACCOUNT_ALIASES = {
    "BANKREKENING_REKENINGNUMMER": "BANKREKENING_IBAN",
    "BANKREKENING_BANK": "BANKREKENING_BANKNAAM",
    "BANKREKENING_STATUS_VERMOGEN": "BANKREKENING_STATUS",
}

ACCOUNT_GRAMMAR = [
    ("bankrekening", "bankrekeningen"),
    ("de bankrekening", "de bankrekeningen"),
    ("saldo", "saldi"),
    ("het saldo", "de saldi"),
    ("valt", "vallen"),
    ("staat", "staan"),
    ("rekening blijft", "rekeningen blijven"),
    ("rekening zal", "rekeningen zullen"),
]


def _map_account(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return {
        "BANKREKENING_IBAN": iban_field(item),
        "BANKREKENING_TENAAMSTELLING": translate_party(item, "tenaamstelling", data),
        "BANKREKENING_BANKNAAM": institution_field(item, "bankNaam"),
        "BANKREKENING_SALDO": money_field(item, "saldo"),
        "BANKREKENING_STATUS": status_field(item),
    }


@register_collection(
    name="BANKREKENINGEN_KINDEREN",
    variable_prefix="BANKREKENING",
    accessor=lambda data: (
        data.communication_agreements.children_bank_accounts
        if data.communication_agreements
        else None
    ),
    aliases=ACCOUNT_ALIASES,
    grammar=ACCOUNT_GRAMMAR[:4] + [("rekeningnummer", "rekeningnummers")] + ACCOUNT_GRAMMAR[4:],
    description="Bank accounts for the children (bankrekeningen kinderen)",
)
def map_children_bank_account(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return _map_account(item, data)


@register_collection(
    name="BANKREKENINGEN",
    variable_prefix="BANKREKENING",
    accessor=lambda data: data.covenant_info.bank_accounts if data.covenant_info else None,
    aliases=ACCOUNT_ALIASES,
    grammar=ACCOUNT_GRAMMAR,
    description="Bank accounts in the division of assets (bankrekeningen)",
)
def map_bank_account(item: dict[str, Any], data: CaseData) -> dict[str, str]:
    return _map_account(item, data)
