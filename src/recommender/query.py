"""Natural-language search query parsing.

Turns a free-text shopping query such as
``"best rated wireless keyboard between 50 and 150"`` into a structured
filter (price bounds), a ranking preference and a keyword list.
"""

import logging
import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.recommender.text import strip_punctuation, tokenize

# Configure module logger
logger = logging.getLogger(__name__)

SortBy = Literal["relevance", "rating", "price"]

SORT_RELEVANCE = "relevance"
SORT_RATING = "rating"
SORT_PRICE = "price"

# Tokens of this length or shorter are not treated as keywords
MIN_KEYWORD_LENGTH = 3

# Largest price a query may state, so the bound in cents still fits a signed
# 64-bit integer; larger captures parse as 0
MAX_PRICE_VALUE = (2 ** 63 - 1) // 100

# Price patterns, tried in this order: a range wins outright over max/min
RANGE_PATTERN = re.compile(
    r"(?:between|from)?\s*\$?(\d+)\s*(?:and|to|-)\s*\$?(\d+)", re.ASCII
)
MAX_PATTERN = re.compile(r"(?:under|below|less than|max|maximum)\s*\$?(\d+)", re.ASCII)
MIN_PATTERN = re.compile(r"(?:over|above|more than|min|minimum)\s*\$?(\d+)", re.ASCII)

# Sort-intent patterns
RATING_PATTERN = re.compile(
    r"best.*rat(?:ed|ing)|top.*rat(?:ed|ing)|highest.*rat(?:ed|ing)"
)
PRICE_PATTERN = re.compile(r"cheap(?:est)?|lowest.*price|budget")


class ParsedQuery(BaseModel):
    """Structured form of a search query.

    Attributes:
        text: Cleaned free text left after filter extraction, empty if none.
        keywords: Unique tokens longer than two characters, in order of
            first appearance.
        price_min: Lower price bound in whole currency units.
        price_max: Upper price bound in whole currency units.
        sort_by: Ranking preference.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(default="", description="Cleaned query text")
    keywords: List[str] = Field(default_factory=list, description="Query keywords")
    price_min: Optional[int] = Field(default=None, alias="priceMin")
    price_max: Optional[int] = Field(default=None, alias="priceMax")
    sort_by: SortBy = Field(default=SORT_RELEVANCE, alias="sortBy")


def _parse_int(value: str) -> int:
    """Parse a captured number, falling back to 0.

    Captures above MAX_PRICE_VALUE count as malformed.
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    if number > MAX_PRICE_VALUE:
        return 0
    return number


def extract_keywords(text: str) -> List[str]:
    """Return unique tokens of at least MIN_KEYWORD_LENGTH characters."""
    keywords = [t for t in tokenize(text) if len(t) >= MIN_KEYWORD_LENGTH]
    return list(dict.fromkeys(keywords))


def parse_search_query(query: str) -> ParsedQuery:
    """Parse a natural-language search query.

    Never raises: empty or nonsensical input yields a query with no bounds,
    no text and ``sort_by="relevance"``.

    Args:
        query: Raw query string as typed by the user.

    Returns:
        ParsedQuery with the extracted bounds, sort preference and keywords.

    Example:
        >>> parsed = parse_search_query("keyboard under 100")
        >>> parsed.price_max, parsed.price_min
        (100, None)
    """
    lower_query = (query or "").strip().lower()
    text_query = lower_query

    price_min: Optional[int] = None
    price_max: Optional[int] = None
    sort_by: SortBy = SORT_RELEVANCE

    range_match = RANGE_PATTERN.search(lower_query)
    if range_match:
        price_min = _parse_int(range_match.group(1))
        price_max = _parse_int(range_match.group(2))
        text_query = text_query.replace(range_match.group(0), "", 1)
    else:
        max_match = MAX_PATTERN.search(lower_query)
        if max_match:
            price_max = _parse_int(max_match.group(1))
            text_query = text_query.replace(max_match.group(0), "", 1)

        min_match = MIN_PATTERN.search(lower_query)
        if min_match:
            price_min = _parse_int(min_match.group(1))
            text_query = text_query.replace(min_match.group(0), "", 1)

    if RATING_PATTERN.search(lower_query):
        sort_by = SORT_RATING
        text_query = RATING_PATTERN.sub("", text_query)
    elif PRICE_PATTERN.search(lower_query):
        sort_by = SORT_PRICE
        text_query = PRICE_PATTERN.sub("", text_query)

    cleaned_text = strip_punctuation(text_query)

    parsed = ParsedQuery(
        text=cleaned_text,
        keywords=extract_keywords(cleaned_text),
        price_min=price_min,
        price_max=price_max,
        sort_by=sort_by,
    )

    logger.debug(
        "Parsed search query",
        extra={
            "query": query,
            "text": parsed.text,
            "price_min": parsed.price_min,
            "price_max": parsed.price_max,
            "sort_by": parsed.sort_by,
        },
    )

    return parsed
