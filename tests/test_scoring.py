"""Tests for the weighted scoring fallback."""

from conftest import make_wine

from weinblog.catalog import Catalog
from weinblog.services.matching import rank_candidates, score_and_rank, score_wine
from weinblog.services.matching.scoring import field_hits


class TestFieldHits:
    """Tests for per-field hit detection."""

    def test_no_hits(self) -> None:
        wine = make_wine("1", "Rioja Reserva", "Spain", "Rioja", ["Tempranillo"])
        assert field_hits(wine, "riesling") == ()

    def test_token_hits_several_fields(self) -> None:
        """A token contained in name and region counts for both."""
        wine = make_wine("1", "Mosel Riesling", "Germany", "Mosel", ["Riesling"])
        assert field_hits(wine, "mosel") == ("name", "region", "partial")

    def test_localized_fields_count(self) -> None:
        """German and Chinese fields are scored too."""
        wine = make_wine(
            "1", "Spatburgunder", "Germany", "Baden", ["Pinot Noir"],
            country_de="Deutschland", country_zh="德国",
        )
        assert "country" in field_hits(wine, "deutschland")
        assert "country" in field_hits(wine, "德国")

    def test_partial_uses_prefix(self) -> None:
        """The first four letters of a token may hit the English name or region."""
        wine = make_wine("1", "Chianti Classico", "Italy", "Tuscany", ["Sangiovese"])
        assert field_hits(wine, "tuscan-hills") == ("partial",)


class TestScoreAndRank:
    """Tests for score_and_rank."""

    def test_grape_beats_country(self) -> None:
        """A grape hit (8) outranks a country hit (5) on an earlier wine."""
        catalog = Catalog([
            make_wine("A", "Quinta Alta", "Portugal", "Douro", ["Touriga"]),
            make_wine("B", "Casa Branca", "Chile", "Maipo", ["Portugieser"]),
        ])
        assert score_and_rank(["portug"], catalog).id == "B"

    def test_tie_keeps_catalog_order(self) -> None:
        """Equal scores resolve to the earlier wine."""
        catalog = Catalog([
            make_wine("A", "Alpha", "Austria", "Wachau", ["Veltliner"]),
            make_wine("B", "Beta", "Austria", "Kamptal", ["Zweigelt"]),
        ])
        assert score_and_rank(["austria"], catalog).id == "A"

    def test_zero_score_is_no_match(self) -> None:
        """No hits at all yields no wine."""
        catalog = Catalog([make_wine("A", "Alpha", "Austria", "Wachau", ["Veltliner"])])
        assert score_and_rank(["bordeaux"], catalog) is None

    def test_no_tokens(self, catalog) -> None:
        assert score_and_rank([], catalog) is None

    def test_scores_are_additive(self) -> None:
        """Every hit of every token adds its weight."""
        wine = make_wine("1", "Mosel Riesling", "Germany", "Mosel", ["Riesling"])
        candidate = score_wine(wine, ["mosel", "riesling"])
        # mosel: name 10 + region 8 + partial 2; riesling: name 10 + grape 8 + partial 2
        assert candidate.score == 40
        assert candidate.matched_fields == (
            "name:mosel",
            "region:mosel",
            "partial:mosel",
            "name:riesling",
            "grape:riesling",
            "partial:riesling",
        )

    def test_custom_weights(self) -> None:
        """Weights can be supplied by the caller."""
        catalog = Catalog([
            make_wine("A", "Quinta Alta", "Portugal", "Douro", ["Touriga"]),
            make_wine("B", "Casa Branca", "Chile", "Maipo", ["Portugieser"]),
        ])
        weights = {"name": 10, "region": 8, "grape": 1, "country": 5, "partial": 2}
        assert score_and_rank(["portug"], catalog, weights).id == "A"

    def test_rank_candidates_drops_zero_scores(self, catalog) -> None:
        ranked = rank_candidates(["veneto"], catalog)
        assert [c.wine.id for c in ranked] == ["5", "12"]
        assert all(c.score > 0 for c in ranked)


class TestPartialBonus:
    """Tests for the partial-prefix bonus."""

    def test_partial_stacks_on_full_english_hit(self) -> None:
        """The partial bonus is added even when the full token already hit.

        Hits are additive, not exclusive: an English region hit scores
        region 8 plus partial 2, while a German-only region hit scores 8.
        """
        wine = make_wine(
            "1", "Chianti Classico", "Italy", "Tuscany", ["Sangiovese"],
            region_de="Toskana",
        )
        assert score_wine(wine, ["tuscany"]).score == 10
        assert score_wine(wine, ["toskana"]).score == 8
