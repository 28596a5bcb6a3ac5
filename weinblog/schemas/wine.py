"""Pydantic schemas for catalog wines."""

from pydantic import BaseModel, ConfigDict

from weinblog.models import PriceTier, WineColor, WineRecord, WineStyle


class WineResponse(BaseModel):
    """Catalog wine as returned by the API."""

    id: str
    name: str
    name_de: str
    name_zh: str
    country: str
    country_de: str
    country_zh: str
    region: str
    region_de: str
    region_zh: str
    grapes: list[str]
    grapes_de: list[str]
    grapes_zh: list[str]
    color: WineColor
    style: WineStyle
    price: PriceTier

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, wine: WineRecord) -> "WineResponse":
        """Build a response from a catalog record."""
        return cls.model_validate(wine)
