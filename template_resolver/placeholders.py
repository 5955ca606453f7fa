"""Placeholder substitution.

Tokens look like ``[[Name]]``. Names are matched case-insensitively and may
carry a modifier prefix: ``[[caps:Name]]`` (first letter upper-case),
``[[upper:Name]]`` or ``[[lower:Name]]``. Unknown tokens are left in the
text so they stay visible in the generated document.
"""

import logging
import re
from collections.abc import Mapping

from convenant.config import get_nested_placeholder_depth
from convenant.utilities.formatting import capitalize
from core.mapping import CaseInsensitiveDict

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")

MODIFIERS = {
    "caps": capitalize,
    "upper": str.upper,
    "lower": str.lower,
}


def split_modifier(name: str) -> tuple[str | None, str]:
    """'caps:Partij1Naam' -> ('caps', 'Partij1Naam')."""
    prefix, sep, rest = name.partition(":")
    if sep and prefix.lower() in MODIFIERS:
        return prefix.lower(), rest
    return None, name


def apply_modifier(value: str, modifier: str | None) -> str:
    if modifier is None or not value:
        return value
    return MODIFIERS[modifier](value)


def _as_replacements(replacements: Mapping[str, str]) -> CaseInsensitiveDict:
    if isinstance(replacements, CaseInsensitiveDict):
        return replacements
    return CaseInsensitiveDict(replacements)


def _substitute(text: str, replacements: CaseInsensitiveDict, warn_missing: bool) -> str:
    def replace(match: re.Match) -> str:
        modifier, name = split_modifier(match.group(1))
        if name in replacements:
            value = replacements[name]
            return apply_modifier("" if value is None else str(value), modifier)
        if warn_missing:
            logger.warning(f"Placeholder not found: [[{name}]]")
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, text)


def replace_placeholders(text: str | None, replacements: Mapping[str, str]) -> str | None:
    """Replace every known [[Name]] token in one pass."""
    if not text:
        return text
    return _substitute(text, _as_replacements(replacements), warn_missing=True)


def resolve_nested(
    text: str | None, replacements: Mapping[str, str], max_depth: int | None = None
) -> str | None:
    """Substitute placeholders repeatedly, so values may contain placeholders.

    Stops when a pass changes nothing or after max_depth passes (default
    from settings); tokens still present after that, including those of a
    cyclic chain, are left as they are.
    """
    if not text:
        return text
    if max_depth is None:
        max_depth = get_nested_placeholder_depth()

    lookup = _as_replacements(replacements)
    current = text
    for _ in range(max_depth):
        resolved = _substitute(current, lookup, warn_missing=False)
        if resolved == current:
            break
        current = resolved
    return current
