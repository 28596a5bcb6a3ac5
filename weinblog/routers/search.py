"""Text search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Query

from weinblog.models import Language
from weinblog.schemas import WineResponse

from ._common import MatcherDep, resolve_language

router = APIRouter()


@router.get("", response_model=list[WineResponse])
async def search_wines(
    matcher: MatcherDep,
    q: Annotated[str, Query(max_length=200, description="Name, region, country or grape")] = "",
    lang: Annotated[Language | None, Query(description="Display language")] = None,
) -> list[WineResponse]:
    """Search wines by name, region, country and grapes in one language.

    Fields in other languages are not searched. A blank query returns no wines.
    """
    results = matcher.match_by_name(q, resolve_language(lang))
    return [WineResponse.from_record(wine) for wine in results]
