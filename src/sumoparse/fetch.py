"""HTTP fetch with retry, backoff, a fixed inter-request delay and caching."""

import logging
import threading
import time
from pathlib import Path

import requests

from sumoparse.models import Division
from sumoparse.util import FetchError

logger = logging.getLogger(__name__)

TORIKUMI_BASE_URL = "https://www.sumo.or.jp/ResultData/torikumi"
HOSHITORI_BASE_URL = "https://sumo.or.jp/ResultData/hoshitori"
HEADERS = {
    "User-Agent": "sumoparse/0.1",
    "Accept-Language": "ja,en;q=0.8",
}
MAX_RETRIES = 3
BACKOFF_BASE = 1  # seconds: 1, 2, 4
DOWNLOAD_DELAY = 2.0  # seconds after each server fetch
REQUEST_TIMEOUT = 30

# One download in flight at a time.
_download_lock = threading.Lock()


def torikumi_url(division: Division, day: int) -> str:
    return f"{TORIKUMI_BASE_URL}/{division.value}/{day}/"


def hoshitori_url(division: Division) -> str:
    return f"{HOSHITORI_BASE_URL}/{division.value}/1/"


def _decode(resp: requests.Response) -> str:
    # requests falls back to ISO-8859-1 for text/html without a charset.
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = resp.apparent_encoding or "utf-8"
    return resp.text


def fetch_page(url: str) -> str:
    """Fetch a page, retrying server errors and timeouts with exponential backoff.

    Client errors other than 429 are not retried: an unpublished day or a bad
    division number will not appear on a second try.
    """
    last_error = None
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            logger.debug("GET %s (attempt %d/%d)", url, attempt, MAX_RETRIES)
            resp = requests.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.warning("Request to %s failed (attempt %d/%d): %s", url, attempt, MAX_RETRIES, e)
            last_error = FetchError(f"Connection error for {url}: {e}")
        else:
            if resp.status_code == 200:
                return _decode(resp)
            last_error = FetchError(f"HTTP {resp.status_code} for {url}")
            if 400 <= resp.status_code < 500 and resp.status_code != 429:
                raise last_error
            logger.warning(
                "HTTP %d for %s (attempt %d/%d)", resp.status_code, url, attempt, MAX_RETRIES,
            )

        if attempt < MAX_RETRIES:
            backoff = BACKOFF_BASE * (2 ** (attempt - 1))
            logger.debug("Backoff %ds before retry", backoff)
            time.sleep(backoff)

    raise last_error  # type: ignore[misc]


def _download_delay() -> None:
    time.sleep(DOWNLOAD_DELAY)


def fetch_with_cache(
    url: str,
    cache_path: Path | None,
    use_cache: bool,
) -> str:
    """Fetch a page, optionally using/saving cache. Server fetches are serialized."""
    if use_cache and cache_path and cache_path.exists():
        logger.info("Cache hit: %s", cache_path)
        return cache_path.read_text(encoding="utf-8")

    with _download_lock:
        html = fetch_page(url)
        _download_delay()

    if use_cache and cache_path:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(html, encoding="utf-8")
        logger.debug("Cached to %s", cache_path)

    return html
