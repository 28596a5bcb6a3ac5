"""Weighted multi-field scoring used as the last URL matching resort."""

from collections.abc import Iterable, Mapping

from weinblog.models import MatchCandidate, WineRecord

from .constants import FIELD_WEIGHTS, PARTIAL_PREFIX_LENGTH


def _lowered(*values: str) -> tuple[str, ...]:
    return tuple(value.lower() for value in values if value)


def field_hits(wine: WineRecord, token: str) -> tuple[str, ...]:
    """Return the field classes ``token`` hits on ``wine``.

    A token can hit several classes at once; each hit is scored.
    """
    token = token.lower()
    if not token:
        return ()

    names = _lowered(wine.name, wine.name_de, wine.name_zh)
    regions = _lowered(wine.region, wine.region_de, wine.region_zh)
    grapes = _lowered(*wine.grapes, *wine.grapes_de, *wine.grapes_zh)
    countries = _lowered(wine.country, wine.country_de, wine.country_zh)

    hits = []
    if any(token in name for name in names):
        hits.append("name")
    if any(token in region for region in regions):
        hits.append("region")
    if any(token in grape for grape in grapes):
        hits.append("grape")
    if any(token in country for country in countries):
        hits.append("country")

    prefix = token[:PARTIAL_PREFIX_LENGTH]
    if prefix in wine.name.lower() or prefix in wine.region.lower():
        hits.append("partial")

    return tuple(hits)


def score_wine(
    wine: WineRecord,
    tokens: Iterable[str],
    weights: Mapping[str, int] = FIELD_WEIGHTS,
) -> MatchCandidate:
    """Score one wine against all tokens."""
    trace = tuple(
        f"{field}:{token}" for token in tokens for field in field_hits(wine, token)
    )
    score = sum(weights[entry.split(":", 1)[0]] for entry in trace)
    return MatchCandidate(wine=wine, score=score, matched_fields=trace)


def score_candidates(
    tokens: Iterable[str],
    catalog: Iterable[WineRecord],
    weights: Mapping[str, int] = FIELD_WEIGHTS,
) -> tuple[MatchCandidate, ...]:
    """Score every wine, keeping catalog order."""
    token_list = tuple(tokens)
    return tuple(score_wine(wine, token_list, weights) for wine in catalog)


def rank_candidates(
    tokens: Iterable[str],
    catalog: Iterable[WineRecord],
    weights: Mapping[str, int] = FIELD_WEIGHTS,
) -> tuple[MatchCandidate, ...]:
    """Candidates with a positive score, best first.

    The sort is stable, so equal scores keep catalog order.
    """
    scored = [c for c in score_candidates(tokens, catalog, weights) if c.score > 0]
    return tuple(sorted(scored, key=lambda c: c.score, reverse=True))


def score_and_rank(
    tokens: Iterable[str],
    catalog: Iterable[WineRecord],
    weights: Mapping[str, int] = FIELD_WEIGHTS,
) -> WineRecord | None:
    """Pick the wine with the strictly highest score.

    Args:
        tokens: Search words extracted from the input.
        catalog: Wines to score, in catalog order.
        weights: Points per hit for each field class.

    Returns:
        The winning wine, or None when no token hit any field.
    """
    ranked = rank_candidates(tokens, catalog, weights)
    return ranked[0].wine if ranked else None
