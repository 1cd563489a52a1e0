"""Page metadata extraction.

Pulls a title and a description out of fetched HTML with BeautifulSoup and
wraps fetch + parse behind ContentExtractor.extract().
"""

from typing import Optional

from bs4 import BeautifulSoup

from .fetch import Fetcher
from .url import is_valid_url
from ..errors import BotFailure
from ..log import get_logger
from ..schemas.command import ExtractionResult, MAX_TITLE_LENGTH, MAX_DESCRIPTION_LENGTH

logger = get_logger("extract")

FALLBACK_TITLE = "Untitled"
FALLBACK_DESCRIPTION = "No description available"


def _text_of(soup: BeautifulSoup, tag_name: str) -> Optional[str]:
    tag = soup.find(tag_name)
    if tag is None:
        return None
    text = tag.get_text().strip()
    return text or None


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    tag = soup.find("meta", attrs={attr: value})
    if tag is None:
        return None
    # content is used as published; only an empty one falls through
    return tag.get("content") or None


def extract_title(soup: BeautifulSoup) -> str:
    title = (
        _text_of(soup, "title")
        or _meta_content(soup, "property", "og:title")
        or _meta_content(soup, "name", "twitter:title")
        or _text_of(soup, "h1")
        or FALLBACK_TITLE
    )
    return title[:MAX_TITLE_LENGTH]


def extract_description(soup: BeautifulSoup) -> str:
    description = (
        _meta_content(soup, "name", "description")
        or _meta_content(soup, "property", "og:description")
        or _meta_content(soup, "name", "twitter:description")
        or _text_of(soup, "p")
        or FALLBACK_DESCRIPTION
    )
    return description[:MAX_DESCRIPTION_LENGTH]


def parse_metadata(html: str, url: str) -> ExtractionResult:
    """
    Parses title/description from HTML.
    Both are already truncated to their length limits.
    """
    soup = BeautifulSoup(html, "html.parser")
    return ExtractionResult(
        title=extract_title(soup),
        description=extract_description(soup),
        source_url=url,
    )


class ContentExtractor:
    def __init__(self, fetcher: Optional[Fetcher] = None):
        self.fetcher = fetcher or Fetcher()

    def extract(self, url: str) -> ExtractionResult:
        """
        Validates the URL, fetches it once and parses its metadata.
        Raises VALIDATION for malformed URLs (before touching the network)
        and EXTRACTION for anything that goes wrong afterwards.
        """
        if not is_valid_url(url):
            raise BotFailure.validation("Invalid URL format")

        html = self.fetcher.fetch_url(url)

        try:
            result = parse_metadata(html, url)
        except Exception as e:
            logger.exception(f"Failed to parse {url}")
            raise BotFailure.extraction(f"Failed to parse webpage: {e}", cause=e) from e

        logger.info(f"Extracted '{result.title}' from {url}")
        return result
