"""Tests for the collection registry."""

import pytest

from core import CaseData
from template_resolver import CollectionRegistry, RegistryError, get_registry, register_collection

BUILT_IN = [
    "BANKREKENINGEN_KINDEREN",
    "BANKREKENINGEN",
    "BELEGGINGEN",
    "VOERTUIGEN",
    "VERZEKERINGEN",
    "SCHULDEN",
    "VORDERINGEN",
    "PENSIOENEN",
]


@pytest.fixture
def temporary_collection():
    """Register a throwaway collection and remove it afterwards."""
    registry = get_registry()
    definition = registry.register(
        "dieren",
        "dier",
        lambda data: data.custom_placeholders.get("dieren"),
        lambda item, data: {"DIER_NAAM": str(item.get("naam", ""))},
        aliases={"DIER_ROEPNAAM": "DIER_NAAM"},
        grammar=[("dier", "dieren")],
        description="Pets",
    )
    yield definition
    registry.unregister("DIEREN")


class TestRegistry:
    def test_singleton(self):
        assert CollectionRegistry() is get_registry()

    def test_built_in_collections_in_order(self):
        assert get_registry().names() == BUILT_IN
        assert get_registry().count() == len(BUILT_IN)

    def test_lookup_case_insensitive(self):
        assert get_registry().get("voertuigen").name == "VOERTUIGEN"
        assert get_registry().get("Voertuigen") is get_registry().get("VOERTUIGEN")

    def test_unknown_name(self):
        assert get_registry().get("ONBEKEND") is None

    def test_duplicate_name_rejected(self):
        with pytest.raises(RegistryError):
            get_registry().register("voertuigen", "X", lambda data: None, lambda item, data: {})

    def test_duplicate_via_decorator_rejected(self):
        with pytest.raises(RegistryError):

            @register_collection(name="SCHULDEN", variable_prefix="SCHULD", accessor=lambda data: None)
            def map_again(item, data):
                return {}

    def test_registered_names_normalized(self, temporary_collection):
        assert temporary_collection.name == "DIEREN"
        assert temporary_collection.variable_prefix == "DIER"
        assert get_registry().names()[-1] == "DIEREN"

    def test_unregister(self, temporary_collection):
        get_registry().unregister("dieren")
        assert get_registry().get("DIEREN") is None
        get_registry().unregister("dieren")


class TestCollectionDefinition:
    def test_marker_pattern(self, temporary_collection):
        pattern = temporary_collection.marker_pattern
        assert pattern.search("[[DIER_NAAM]]")
        assert pattern.search("[[dier_soort]]")
        assert not pattern.search("[[DIERNAAM]]")
        assert not pattern.search("[[DIEREN]]")

    def test_resolve_items_adds_aliases(self, temporary_collection):
        data = CaseData(custom_placeholders={"dieren": '[{"naam": "Max"}, {"naam": "Bello"}]'})

        items = temporary_collection.resolve_items(data)

        assert [item["DIER_NAAM"] for item in items] == ["Max", "Bello"]
        assert items[0]["dier_roepnaam"] == "Max"

    def test_variable_names(self, temporary_collection):
        assert temporary_collection.variable_names() == ["DIER_NAAM", "DIER_ROEPNAAM"]

    def test_alias_for_missing_variable_skipped(self):
        definition = get_registry().get("VOERTUIGEN")
        variables = definition.map_item({"kenteken": "AB-123-C"}, CaseData())
        assert variables["VOERTUIG_HANDELSBENAMING"] == variables["VOERTUIG_MODEL"] == ""

    def test_load_items_skips_non_objects(self, temporary_collection):
        data = CaseData(custom_placeholders={"dieren": '[{"naam": "Max"}, 3, "x", null]'})
        assert temporary_collection.load_items(data) == [{"naam": "Max"}]


class TestCatalog:
    def test_catalog_entry(self, temporary_collection):
        catalog = {entry["name"]: entry for entry in get_registry().to_catalog()}

        entry = catalog["DIEREN"]

        assert entry["description"] == "Pets"
        assert entry["marker"] == "[[#DIEREN]]...[[/DIEREN]]"
        assert entry["variables"] == ["DIER_NAAM", "DIER_ROEPNAAM"]
        assert entry["aliases"] == {"DIER_ROEPNAAM": "DIER_NAAM"}

    def test_every_collection_documented(self):
        catalog = get_registry().to_catalog()

        assert [entry["name"] for entry in catalog] == BUILT_IN
        for entry in catalog:
            assert entry["description"]
            prefix = get_registry().get(entry["name"]).variable_prefix
            assert all(name.startswith(f"{prefix}_") for name in entry["variables"])
