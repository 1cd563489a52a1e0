"""HTTP fetching with a bounded timeout.

One GET per call, no retries: every failure is reported as an EXTRACTION BotFailure.
The timeout bounds the whole request, body included, not just each socket operation.
"""

import time

import httpx
from ..errors import BotFailure
from ..log import get_logger

logger = get_logger("fetch")

DEFAULT_TIMEOUT_SECONDS = 10.0

class Fetcher:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout
        self.headers = {
            "User-Agent": "Mozilla/5.0 (compatible; SaveLinkBot/1.0)",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

    def _timed_out(self, url: str, cause=None) -> BotFailure:
        logger.warning(f"Timed out fetching {url} after {self.timeout}s")
        return BotFailure.extraction(f"Request timed out after {self.timeout:g} seconds", cause=cause)

    def fetch_url(self, url: str) -> str:
        """
        Fetches the content of a URL. Returns text/html content.
        The body is streamed and abandoned once the deadline passes; the
        stream and client are closed on every exit path, so a timed out
        request doesn't keep its connection around.
        """
        deadline = time.monotonic() + self.timeout
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, headers=self.headers) as client:
                with client.stream("GET", url) as resp:
                    if not resp.is_success:
                        raise BotFailure.extraction(f"HTTP {resp.status_code}: {resp.reason_phrase}")
                    chunks = []
                    for chunk in resp.iter_bytes():
                        chunks.append(chunk)
                        if time.monotonic() > deadline:
                            raise self._timed_out(url)
                    return b"".join(chunks).decode(resp.encoding or "utf-8", errors="replace")
        except BotFailure:
            raise
        except httpx.TimeoutException as e:
            raise self._timed_out(url, cause=e) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Fetch failed for {url}: {e}")
            raise BotFailure.extraction(f"Failed to scrape webpage: {e}", cause=e) from e
        except LookupError as e:
            # unknown charset in Content-Type
            raise BotFailure.extraction(f"Failed to decode webpage: {e}", cause=e) from e
