"""Declarative tables used by the wine matchers."""

import re

from weinblog.models import ExactAlias, SearchTerm

# Product URL slugs that name one catalog wine. Checked before generic name
# matching because short names are unreliable as substrings.
EXACT_ALIASES: tuple[ExactAlias, ...] = (
    ExactAlias(
        patterns=("miraval-rose", "miraval-rosé", "miraval rose", "miraval rosé", "miravalrose"),
        wine_id="20",
    ),
    ExactAlias(
        patterns=("pesquera-crianza", "pesquera crianza", "pesqueracrianza"),
        wine_id="8",
    ),
    ExactAlias(patterns=("prosecco",), wine_id="12"),
    ExactAlias(
        patterns=("roero-arneis", "roero arneis", "roeroarneis", "roero", "arneis"),
        wine_id="21",
    ),
    ExactAlias(patterns=("meursault",), wine_id="22"),
)

# Synonyms mapped to canonical search queries, tried by ascending priority:
# 1 complete wine name, 2 grape variety, 3 region, 4 style or technique.
SEARCH_TERMS: tuple[SearchTerm, ...] = (
    # Wine names
    SearchTerm(aliases=("miraval rose", "miraval rosé", "miraval"), canonical_query="miraval rosé", priority=1),
    SearchTerm(aliases=("pesquera crianza", "pesquera"), canonical_query="pesquera crianza", priority=1),
    SearchTerm(aliases=("prosecco",), canonical_query="prosecco", priority=1),
    SearchTerm(aliases=("roero arneis", "roero-arneis", "roero", "arneis"), canonical_query="roero arneis", priority=1),
    SearchTerm(aliases=("meursault",), canonical_query="meursault", priority=1),
    # Grape varieties
    SearchTerm(aliases=("riesling", "雷司令"), canonical_query="riesling", priority=2),
    SearchTerm(
        aliases=("spatburgunder", "spätburgunder", "pinot noir", "pinot", "黑皮诺"),
        canonical_query="pinot noir",
        priority=2,
    ),
    SearchTerm(aliases=("gewurz", "gewürztraminer", "琼瑶浆"), canonical_query="gewürztraminer", priority=2),
    SearchTerm(aliases=("dornfelder", "丹菲特"), canonical_query="dornfelder", priority=2),
    SearchTerm(aliases=("sekt", "起泡酒", "sparkling"), canonical_query="sekt", priority=2),
    SearchTerm(aliases=("tempranillo", "丹魄"), canonical_query="tempranillo", priority=2),
    SearchTerm(aliases=("garnacha", "歌海娜"), canonical_query="garnacha", priority=2),
    SearchTerm(aliases=("sangiovese", "桑娇维塞"), canonical_query="sangiovese", priority=2),
    SearchTerm(aliases=("chardonnay", "霞多丽"), canonical_query="chardonnay", priority=2),
    SearchTerm(aliases=("cabernet", "赤霞珠"), canonical_query="cabernet", priority=2),
    SearchTerm(aliases=("merlot", "梅洛"), canonical_query="merlot", priority=2),
    SearchTerm(aliases=("glera", "格雷拉"), canonical_query="glera", priority=2),
    SearchTerm(aliases=("silvaner", "西万尼"), canonical_query="silvaner", priority=2),
    SearchTerm(aliases=("muller", "müller", "thurgau", "米勒", "图高"), canonical_query="müller-thurgau", priority=2),
    # Regions
    SearchTerm(aliases=("mosel",), canonical_query="mosel", priority=3),
    SearchTerm(aliases=("baden",), canonical_query="baden", priority=3),
    SearchTerm(aliases=("pfalz",), canonical_query="pfalz", priority=3),
    SearchTerm(aliases=("rheingau",), canonical_query="rheingau", priority=3),
    SearchTerm(aliases=("ribera", "duero", "杜埃罗"), canonical_query="ribera del duero", priority=3),
    SearchTerm(aliases=("rioja", "里奥哈"), canonical_query="rioja", priority=3),
    SearchTerm(aliases=("champagne", "香槟"), canonical_query="champagne", priority=3),
    SearchTerm(aliases=("bordeaux", "波尔多"), canonical_query="bordeaux", priority=3),
    SearchTerm(aliases=("burgundy", "burgund", "勃艮第"), canonical_query="burgundy", priority=3),
    SearchTerm(aliases=("chianti", "基安蒂"), canonical_query="chianti", priority=3),
    SearchTerm(aliases=("tuscany", "toskana", "托斯卡纳"), canonical_query="tuscany", priority=3),
    SearchTerm(aliases=("veneto", "威尼托"), canonical_query="veneto", priority=3),
    SearchTerm(aliases=("franken", "弗兰肯"), canonical_query="franken", priority=3),
    SearchTerm(aliases=("rheinhessen", "莱茵黑森"), canonical_query="rheinhessen", priority=3),
    SearchTerm(aliases=("provence", "普罗旺斯"), canonical_query="provence", priority=3),
    # Styles
    SearchTerm(aliases=("trocken", "dry", "干型"), canonical_query="trocken", priority=4),
    SearchTerm(aliases=("süß", "sweet", "甜型"), canonical_query="sweet", priority=4),
    SearchTerm(aliases=("crianza", "陈酿"), canonical_query="crianza", priority=4),
    SearchTerm(aliases=("reserva", "珍藏"), canonical_query="reserva", priority=4),
    SearchTerm(aliases=("brut", "干型起泡"), canonical_query="brut", priority=4),
)

# Keywords looked for in OCR output of a label photo, in order
OCR_SEARCH_TERMS: tuple[str, ...] = (
    "riesling", "雷司令", "spatburgunder", "spätburgunder", "pinot", "黑皮诺",
    "gewurz", "gewürztraminer", "琼瑶浆", "dornfelder", "丹菲特",
    "sekt", "起泡酒", "trocken", "干型", "süß", "甜型",
)

# Keywords looked for in an upload's filename when OCR is unavailable
FILENAME_SEARCH_TERMS: tuple[str, ...] = (
    "riesling", "雷司令", "spatburgunder", "pinot", "黑皮诺",
    "gewurz", "琼瑶浆", "dornfelder", "丹菲特", "sekt", "起泡酒",
)

# Generic web and wine-trade words that never identify a wine
STOPLIST: frozenset[str] = frozenset({
    "www", "http", "https", "com", "de", "en",
    "html", "htm", "php", "aspx", "asp",
    "shop", "index", "product", "products", "produkt", "produkte", "detail", "details",
    "wine", "wein", "wines", "weine",
    "aop", "aoc", "doc", "docg",
    "familles", "pitt", "perrin", "cotes", "les", "vignes",
})

YEAR_PATTERN = re.compile(r"^(19|20)\d{2}$")

DOCUMENT_EXTENSION_PATTERN = re.compile(r"\.(html?|php|aspx?)$", re.IGNORECASE)

TOKEN_SPLIT_PATTERN = re.compile(r"[\s\-_./]+")

# Tokens of this length or shorter are ignored by tokenized matching
MIN_TOKEN_LENGTH = 3

# Weight per token hit for each field class in the scoring fallback
FIELD_WEIGHTS: dict[str, int] = {
    "name": 10,
    "region": 8,
    "grape": 8,
    "country": 5,
    "partial": 2,
}

# Leading characters of a token used for partial matches
PARTIAL_PREFIX_LENGTH = 4
