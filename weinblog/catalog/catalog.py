"""Immutable, ordered wine catalog."""

from collections.abc import Iterable, Iterator

from weinblog.models import PriceTier, WineColor, WineRecord, WineStyle


class CatalogError(Exception):
    """Raised when catalog data is inconsistent."""

    pass


class Catalog:
    """Read-only collection of wine records in their catalog order.

    Matchers receive a Catalog explicitly; catalog order is the tie-break
    for every matcher that returns a single wine.
    """

    def __init__(self, wines: Iterable[WineRecord]) -> None:
        self._wines: tuple[WineRecord, ...] = tuple(wines)
        self._by_id: dict[str, WineRecord] = {}
        for wine in self._wines:
            if wine.id in self._by_id:
                raise CatalogError(f"Duplicate wine id in catalog: {wine.id}")
            self._by_id[wine.id] = wine

    def __iter__(self) -> Iterator[WineRecord]:
        return iter(self._wines)

    def __len__(self) -> int:
        return len(self._wines)

    def __contains__(self, wine_id: object) -> bool:
        return wine_id in self._by_id

    def __repr__(self) -> str:
        return f"<Catalog(wines={len(self._wines)})>"

    def get(self, wine_id: str) -> WineRecord | None:
        """Get a wine by id."""
        return self._by_id.get(wine_id)

    def filter(
        self,
        color: WineColor | None = None,
        style: WineStyle | None = None,
        price: PriceTier | None = None,
    ) -> list[WineRecord]:
        """List wines matching every given attribute, in catalog order."""
        return [
            wine
            for wine in self._wines
            if (color is None or wine.color == color)
            and (style is None or wine.style == style)
            and (price is None or wine.price == price)
        ]
