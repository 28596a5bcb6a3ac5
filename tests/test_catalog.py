"""Tests for wine records and the catalog."""

import json

import pytest
from conftest import make_wine
from pydantic import ValidationError

from weinblog.catalog import DEFAULT_CATALOG_PATH, Catalog, CatalogError, load_catalog
from weinblog.models import PriceTier, WineColor, WineRecord, WineStyle


class TestWineRecord:
    """Tests for the WineRecord model."""

    def test_camel_case_aliases(self) -> None:
        wine = WineRecord.model_validate({
            "id": "3",
            "name": "Baden Pinot Noir",
            "nameDe": "Badischer Spätburgunder",
            "country": "Germany",
            "region": "Baden",
            "grapes": ["Pinot Noir"],
            "grapesDe": ["Spätburgunder"],
            "color": "red",
            "scanCodes": ["WEIN-BAD-003"],
        })
        assert wine.name_de == "Badischer Spätburgunder"
        assert wine.grapes_de == ("Spätburgunder",)
        assert wine.scan_codes == frozenset({"WEIN-BAD-003"})
        assert wine.style == WineStyle.STILL
        assert wine.price == PriceTier.MID

    def test_localized_accessors(self, sample_wines) -> None:
        wine = sample_wines[1]
        assert wine.name_for("de") == "Rheingau Riesling Trocken"
        assert wine.region_for("zh") == "莱茵高"
        assert wine.country_for("en") == "Germany"
        assert wine.grapes_for("zh") == ("雷司令",)
        assert wine.name_for("fr") == ""

    def test_display_name_falls_back_to_english(self, sample_wines) -> None:
        prosecco = sample_wines[4]
        assert prosecco.display_name("zh") == "Prosecco"

    def test_grape_lists_must_be_parallel(self) -> None:
        with pytest.raises(ValidationError):
            make_wine("9", "Cuvée", "France", "Rhône", ["Grenache", "Syrah"], grapes_de=("Grenache",))

    def test_empty_localized_grapes_allowed(self) -> None:
        wine = make_wine("9", "Cuvée", "France", "Rhône", ["Grenache", "Syrah"])
        assert wine.grapes_de == ()

    def test_records_are_frozen(self, sample_wines) -> None:
        with pytest.raises(ValidationError):
            sample_wines[0].name = "Changed"


class TestCatalog:
    """Tests for Catalog."""

    def test_order_and_lookup(self, catalog) -> None:
        assert [wine.id for wine in catalog] == ["1", "2", "3", "5", "12", "7"]
        assert len(catalog) == 6
        assert catalog.get("12").name == "Prosecco"
        assert catalog.get("999") is None
        assert "7" in catalog

    def test_duplicate_id_rejected(self, sample_wines) -> None:
        with pytest.raises(CatalogError):
            Catalog([*sample_wines, sample_wines[0]])

    def test_filter(self, catalog) -> None:
        assert [w.id for w in catalog.filter(color=WineColor.RED)] == ["7"]
        assert [w.id for w in catalog.filter(style=WineStyle.SPARKLING)] == ["5", "12"]
        assert [w.id for w in catalog.filter(style=WineStyle.SPARKLING, price=PriceTier.BUDGET)] == ["12"]
        assert len(catalog.filter()) == 6


class TestLoadCatalog:
    """Tests for loading catalog JSON."""

    def test_bundled_catalog(self) -> None:
        catalog = load_catalog()
        assert len(catalog) == 22
        assert catalog.get("12").name == "Prosecco"
        assert catalog.get("20").name == "Miraval Rosé"

    def test_bundled_scan_codes_unique(self) -> None:
        seen: set[str] = set()
        for wine in load_catalog(DEFAULT_CATALOG_PATH):
            assert not seen & wine.scan_codes
            seen |= wine.scan_codes

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "wines.json"
        path.write_text(json.dumps([
            {"id": "1", "name": "Test", "country": "Germany", "region": "Mosel", "color": "white"},
        ]), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.get("1").name == "Test"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "wines.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_not_a_list(self, tmp_path) -> None:
        path = tmp_path / "wines.json"
        path.write_text('{"wines": []}', encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_invalid_wine(self, tmp_path) -> None:
        path = tmp_path / "wines.json"
        path.write_text('[{"id": "1", "name": "No color"}]', encoding="utf-8")
        with pytest.raises(CatalogError, match="position 0"):
            load_catalog(path)
