"""Catalog wine endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from weinblog.models import PriceTier, WineColor, WineStyle
from weinblog.schemas import SourceUrlResponse, WineResponse

from ._common import CatalogDep, SourceUrlsDep

router = APIRouter()


@router.get("", response_model=list[WineResponse])
async def list_wines(
    catalog: CatalogDep,
    color: Annotated[WineColor | None, Query(description="Wine color")] = None,
    style: Annotated[WineStyle | None, Query(description="Still, sparkling or fortified")] = None,
    price: Annotated[PriceTier | None, Query(description="Price tier")] = None,
) -> list[WineResponse]:
    """List catalog wines, optionally filtered by color, style and price tier."""
    return [
        WineResponse.from_record(wine)
        for wine in catalog.filter(color=color, style=style, price=price)
    ]


@router.get("/{wine_id}", response_model=WineResponse)
async def get_wine(wine_id: str, catalog: CatalogDep) -> WineResponse:
    """Get a catalog wine by id."""
    wine = catalog.get(wine_id)
    if not wine:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wine not found")
    return WineResponse.from_record(wine)


@router.get("/{wine_id}/source-url", response_model=SourceUrlResponse)
async def get_wine_source_url(
    wine_id: str, catalog: CatalogDep, source_urls: SourceUrlsDep
) -> SourceUrlResponse:
    """Get the product URL a wine was last identified from."""
    if wine_id not in catalog:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wine not found")

    url = source_urls.get(wine_id)
    if url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No source URL recorded for this wine",
        )
    return SourceUrlResponse(wine_id=wine_id, url=url)
