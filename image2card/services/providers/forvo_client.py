"""Client for community-recorded pronunciations on Forvo."""

import logging
from urllib.parse import quote

import requests

from image2card.exceptions import ProviderError
from image2card.models import CommunityPronunciation
from image2card.utils import safe_filename

logger = logging.getLogger(__name__)


class ForvoClient:
    """Search and download native-speaker recordings through the Forvo API."""

    def __init__(
        self,
        api_key: str,
        language: str = "ja",
        timeout: float = 10.0,
        limit: int = 1,
        api_url: str = "https://apifree.forvo.com",
    ):
        self._api_key = api_key
        self._language = language
        self._timeout = timeout
        self._limit = limit
        self._api_url = api_url.rstrip("/")

    def is_available(self) -> bool:
        return bool(self._api_key)

    def search(self, word: str) -> list[CommunityPronunciation]:
        """Find the best-rated recordings of a word.

        Raises:
            ProviderError: On network errors or malformed responses
        """
        url = (
            f"{self._api_url}/key/{self._api_key}/format/json/action/word-pronunciations"
            f"/word/{quote(word)}/language/{self._language}/order/rate-desc/limit/{self._limit}"
        )
        try:
            response = requests.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise ProviderError(f"Forvo request failed: {e}") from e

        if response.status_code != 200:
            raise ProviderError(f"Forvo returned HTTP {response.status_code}")

        try:
            items = response.json().get("items", [])
        except ValueError as e:
            raise ProviderError(f"Malformed Forvo response: {e}") from e

        results = []
        for item in items:
            url = item.get("pathmp3")
            if not url:
                continue
            username = item.get("username", "")
            filename = safe_filename(f"forvo_{word}_{username}.mp3" if username else f"forvo_{word}.mp3")
            results.append(CommunityPronunciation(word, url, filename, username))
        return results

    def download(self, url: str) -> bytes:
        """Download a recording.

        Raises:
            ProviderError: If the download fails
        """
        try:
            response = requests.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise ProviderError(f"Forvo download failed: {e}") from e

        if response.status_code != 200:
            raise ProviderError(f"Failed to download audio: HTTP {response.status_code}")
        return response.content
