"""Wine catalog models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Language = Literal["en", "de", "zh"]

LANGUAGES: tuple[str, ...] = ("en", "de", "zh")


class WineColor(str, Enum):
    """Wine color."""

    RED = "red"
    WHITE = "white"
    ROSE = "rose"


class WineStyle(str, Enum):
    """Wine style."""

    STILL = "still"
    SPARKLING = "sparkling"
    FORTIFIED = "fortified"


class PriceTier(str, Enum):
    """Price tier."""

    BUDGET = "budget"
    MID = "mid"
    PREMIUM = "premium"


class WineRecord(BaseModel):
    """A catalog entry with English, German and Chinese display fields.

    The three grape lists are parallel: the same variety sits at the same
    index in each language. A localized list may be left empty when no
    translation exists.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    name_de: str = Field("", alias="nameDe")
    name_zh: str = Field("", alias="nameZh")
    country: str
    country_de: str = Field("", alias="countryDe")
    country_zh: str = Field("", alias="countryZh")
    region: str
    region_de: str = Field("", alias="regionDe")
    region_zh: str = Field("", alias="regionZh")
    grapes: tuple[str, ...] = ()
    grapes_de: tuple[str, ...] = Field((), alias="grapesDe")
    grapes_zh: tuple[str, ...] = Field((), alias="grapesZh")
    color: WineColor
    style: WineStyle = WineStyle.STILL
    price: PriceTier = PriceTier.MID
    scan_codes: frozenset[str] = Field(frozenset(), alias="scanCodes")

    @model_validator(mode="after")
    def check_parallel_grapes(self) -> "WineRecord":
        """Localized grape lists must line up with the English one."""
        for label, localized in (("grapesDe", self.grapes_de), ("grapesZh", self.grapes_zh)):
            if localized and len(localized) != len(self.grapes):
                raise ValueError(
                    f"{label} has {len(localized)} entries, grapes has {len(self.grapes)}"
                )
        return self

    def name_for(self, language: str) -> str:
        return {"en": self.name, "de": self.name_de, "zh": self.name_zh}.get(language, "")

    def country_for(self, language: str) -> str:
        return {"en": self.country, "de": self.country_de, "zh": self.country_zh}.get(
            language, ""
        )

    def region_for(self, language: str) -> str:
        return {"en": self.region, "de": self.region_de, "zh": self.region_zh}.get(
            language, ""
        )

    def grapes_for(self, language: str) -> tuple[str, ...]:
        return {"en": self.grapes, "de": self.grapes_de, "zh": self.grapes_zh}.get(
            language, ()
        )

    def display_name(self, language: str) -> str:
        """Localized name, falling back to English for presentation."""
        return self.name_for(language) or self.name

    def __repr__(self) -> str:
        return f"<WineRecord(id={self.id}, name={self.name})>"


class MatchCandidate(BaseModel):
    """A wine paired with its accumulated score for one scoring run."""

    model_config = ConfigDict(frozen=True)

    wine: WineRecord
    score: int = 0
    matched_fields: tuple[str, ...] = ()


class SearchTerm(BaseModel):
    """Synonyms across languages mapped to a canonical search query.

    Lower ``priority`` values are tried first: 1 is a complete wine name,
    2 a grape variety, 3 a region, 4 a style or technique.
    """

    model_config = ConfigDict(frozen=True)

    aliases: tuple[str, ...]
    canonical_query: str
    priority: int = 99


class ExactAlias(BaseModel):
    """Product URL slugs that identify one catalog wine directly."""

    model_config = ConfigDict(frozen=True)

    patterns: tuple[str, ...]
    wine_id: str
