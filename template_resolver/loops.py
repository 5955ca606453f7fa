"""Loop section expansion.

Syntax: ``[[#COLLECTION]] ... [[/COLLECTION]]`` (names case-insensitive,
open and close name must be the same).

For each block the collection is resolved (structural child collections
first, then the collection registry):

- unknown or empty collection: the whole block is removed
- body contains item variables: the body is repeated once per item with
  that item's variables filled in, one item per line
- body without item variables: the body is shown once (conditional text)

The whole text is reprocessed until nothing changes so that nested loops
are expanded from the outside in. Loops run before IF blocks and
placeholder replacement.
"""

import logging
import re
from collections.abc import Mapping

from core import CaseData, CaseInsensitiveDict
from template_resolver.children import CHILD_VARIABLES, child_variables, resolve_children
from template_resolver.registry import CollectionDefinition, get_registry

logger = logging.getLogger(__name__)

LOOP_PATTERN = re.compile(r"\[\[#(\w+)\]\](.*?)\[\[/\1\]\]", re.DOTALL | re.IGNORECASE)
TOKEN_PATTERN = re.compile(r"\[\[(\w+)\]\]")
BLANK_LINES_PATTERN = re.compile(r"(\r?\n){3,}")

# Upper bound on full-text passes (nesting depth plus one)
MAX_ITERATIONS = 10


def substitute_item(body: str, variables: Mapping[str, str]) -> str:
    """Fill in item variables; tokens the item does not define stay as-is."""

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return variables[name]
        return match.group(0)

    return TOKEN_PATTERN.sub(replace, body)


def _expand_items(body: str, items: list[Mapping[str, str]]) -> str:
    template = body.strip()
    return "\n".join(substitute_item(template, item) for item in items)


def _expand_children(name: str, body: str, data: CaseData) -> str | None:
    """Expand a structural block, or None if the name is not structural."""
    children = resolve_children(name, data)
    if children is None:
        return None
    if not children:
        logger.debug(f"Loop {name}: no children, block removed")
        return ""

    tokens = {t.upper() for t in TOKEN_PATTERN.findall(body)}
    if tokens & CHILD_VARIABLES:
        logger.debug(f"Loop {name}: expanding for {len(children)} children")
        return _expand_items(body, [child_variables(c, data) for c in children])

    logger.debug(f"Loop {name}: no child variables, shown once")
    return body.strip()


def _has_item_markers(
    body: str, definition: CollectionDefinition, sample: CaseInsensitiveDict
) -> bool:
    if definition.marker_pattern.search(body):
        return True
    return any(token in sample for token in TOKEN_PATTERN.findall(body))


def _expand_collection(name: str, body: str, data: CaseData) -> str:
    definition = get_registry().get(name)
    if definition is None:
        logger.debug(f"Loop {name}: unknown collection, block removed")
        return ""

    items = definition.resolve_items(data)
    if not items:
        logger.debug(f"Loop {name}: empty collection, block removed")
        return ""

    if _has_item_markers(body, definition, items[0]):
        logger.debug(f"Loop {name}: expanding for {len(items)} items")
        return _expand_items(body, items)

    logger.debug(f"Loop {name}: no item variables, shown once")
    return body.strip()


def _expand_block(match: re.Match, data: CaseData) -> str:
    name, body = match.group(1), match.group(2)
    expanded = _expand_children(name, body, data)
    if expanded is not None:
        return expanded
    return _expand_collection(name, body, data)


def expand_loops(text: str | None, data: CaseData | None) -> str | None:
    """Expand all loop sections in the text.

    Empty text and missing case data return the text unchanged.
    """
    if not text or data is None:
        return text

    previous = None
    current = text
    iteration = 0
    while current != previous and iteration < MAX_ITERATIONS:
        previous = current
        current = LOOP_PATTERN.sub(lambda m: _expand_block(m, data), current)
        iteration += 1

    if iteration == MAX_ITERATIONS and LOOP_PATTERN.search(current):
        logger.warning(f"Loop expansion stopped after {MAX_ITERATIONS} passes")

    return BLANK_LINES_PATTERN.sub("\n\n", current)
