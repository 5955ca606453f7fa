"""Utilities - field formatting, Dutch language helpers, grammar rules, logging."""

from convenant.utilities.dutch import format_list
from convenant.utilities.formatting import (
    convert_to_string,
    format_currency,
    format_date,
    format_iban,
    humanize_snake_case,
)
from convenant.utilities.grammar import GrammarRulesBuilder
from convenant.utilities.logging import setup_logging

__all__ = [
    "GrammarRulesBuilder",
    "convert_to_string",
    "format_currency",
    "format_date",
    "format_iban",
    "format_list",
    "humanize_snake_case",
    "setup_logging",
]
