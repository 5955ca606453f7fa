"""Collection registry and registration decorator.

This module provides the central registry for all loop collections backed
by a JSON array on the case data. Collections are registered using the
@register_collection decorator, which captures metadata alongside the item
mapper function.

Adding a collection only needs a new registration; the loop expander looks
collections up by name.
"""

import json
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.mapping import CaseInsensitiveDict
from template_resolver.errors import RegistryError

if TYPE_CHECKING:
    from core import CaseData

logger = logging.getLogger(__name__)

# Type aliases for collection functions
Accessor = Callable[["CaseData"], str | None]
ItemMapper = Callable[[dict[str, Any], "CaseData"], dict[str, str]]


@dataclass(frozen=True)
class CollectionDefinition:
    """Complete definition of a JSON-backed loop collection."""

    name: str
    variable_prefix: str
    accessor: Accessor
    item_mapper: ItemMapper
    aliases: tuple[tuple[str, str], ...] = ()  # (alias, canonical variable)
    grammar: tuple[tuple[str, str], ...] = ()  # (singular, plural)
    description: str = ""

    @property
    def marker_pattern(self) -> re.Pattern:
        """Matches item-level tokens: [[<PREFIX>_<FIELD>]]."""
        return re.compile(
            rf"\[\[{re.escape(self.variable_prefix)}_\w+\]\]", re.IGNORECASE
        )

    def load_items(self, case_data: "CaseData") -> list[dict[str, Any]]:
        """Parse the raw JSON array from the case data.

        Absent data gives an empty list. Malformed JSON or a value that is
        not an array is logged and also gives an empty list. Elements that
        are not JSON objects are skipped.
        """
        raw = self.accessor(case_data)
        if raw is None or not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON for collection {self.name}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(
                f"Collection {self.name} is not a JSON array ({type(data).__name__})"
            )
            return []

        items = [item for item in data if isinstance(item, dict)]
        if len(items) != len(data):
            logger.debug(
                f"Skipped {len(data) - len(items)} non-object items in {self.name}"
            )
        return items

    def map_item(self, item: dict[str, Any], case_data: "CaseData") -> CaseInsensitiveDict:
        """Run the item mapper and add the aliases."""
        variables = CaseInsensitiveDict(self.item_mapper(item, case_data))
        for alias, canonical in self.aliases:
            if canonical in variables:
                variables[alias] = variables[canonical]
        return variables

    def resolve_items(self, case_data: "CaseData") -> list[CaseInsensitiveDict]:
        """Load and map all items. An item whose mapper fails is skipped."""
        resolved = []
        for index, item in enumerate(self.load_items(case_data)):
            try:
                resolved.append(self.map_item(item, case_data))
            except Exception as e:
                logger.error(
                    f"Error mapping item {index} of {self.name}: {e}", exc_info=True
                )
        return resolved

    def variable_names(self) -> list[str]:
        """All variable names an item exposes, from a mapping of an empty item."""
        from core import CaseData

        return list(self.map_item({}, CaseData()))


class CollectionRegistry:
    """Singleton registry for all JSON-backed loop collections.

    Collections are registered via the @register_collection decorator.
    Names are unique and looked up case-insensitively; iteration follows
    registration order.
    """

    _instance: "CollectionRegistry | None" = None
    _collections: dict[str, CollectionDefinition]

    def __new__(cls) -> "CollectionRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._collections = {}
        return cls._instance

    def register(
        self,
        name: str,
        variable_prefix: str,
        accessor: Accessor,
        item_mapper: ItemMapper,
        aliases: Mapping[str, str] | None = None,
        grammar: list[tuple[str, str]] | None = None,
        description: str = "",
    ) -> CollectionDefinition:
        """Register a collection definition."""
        key = name.casefold()
        if key in self._collections:
            raise RegistryError(f"Collection already registered: {name}")

        definition = CollectionDefinition(
            name=name.upper(),
            variable_prefix=variable_prefix.upper(),
            accessor=accessor,
            item_mapper=item_mapper,
            aliases=tuple((aliases or {}).items()),
            grammar=tuple(grammar or ()),
            description=description,
        )
        self._collections[key] = definition
        return definition

    def unregister(self, name: str) -> None:
        """Remove a collection (for testing)."""
        self._collections.pop(name.casefold(), None)

    def get(self, name: str) -> CollectionDefinition | None:
        """Get a collection definition by name (case-insensitive)."""
        return self._collections.get(name.casefold())

    def all_collections(self) -> list[CollectionDefinition]:
        """Get all registered collections in registration order."""
        return list(self._collections.values())

    def names(self) -> list[str]:
        return [c.name for c in self._collections.values()]

    def count(self) -> int:
        """Get total number of registered collections."""
        return len(self._collections)

    def to_catalog(self) -> list[dict]:
        """Describe every collection and its variables for template authors."""
        catalog = []
        for definition in self._collections.values():
            catalog.append(
                {
                    "name": definition.name,
                    "description": definition.description,
                    "marker": f"[[#{definition.name}]]...[[/{definition.name}]]",
                    "variables": definition.variable_names(),
                    "aliases": dict(definition.aliases),
                }
            )
        return catalog


def register_collection(
    name: str,
    variable_prefix: str,
    accessor: Accessor,
    aliases: Mapping[str, str] | None = None,
    grammar: list[tuple[str, str]] | None = None,
    description: str = "",
) -> Callable[[ItemMapper], ItemMapper]:
    """Decorator to register a collection item mapper.

    Usage:
        @register_collection(
            name="VOERTUIGEN",
            variable_prefix="VOERTUIG",
            accessor=lambda data: data.covenant_info and data.covenant_info.vehicles,
            aliases={"VOERTUIG_HANDELSBENAMING": "VOERTUIG_MODEL"},
            grammar=[("voertuig", "voertuigen")],
            description="Vehicles (voertuigen)",
        )
        def map_vehicle(item: dict, data: CaseData) -> dict[str, str]:
            return {"VOERTUIG_KENTEKEN": text_field(item, "kenteken"), ...}
    """

    def decorator(func: ItemMapper) -> ItemMapper:
        CollectionRegistry().register(
            name, variable_prefix, accessor, func, aliases, grammar, description
        )
        return func

    return decorator


def get_registry() -> CollectionRegistry:
    """Get the singleton collection registry."""
    return CollectionRegistry()
