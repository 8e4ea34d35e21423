"""Jisho API dictionary provider."""

import logging
import time

import requests

from image2card.exceptions import DictionaryLookupError
from image2card.models import DictionaryEntry

logger = logging.getLogger(__name__)

MAX_SENSES = 5


def _pick_result(results: list[dict], word: str) -> dict:
    """Prefer the result whose headword or reading is exactly the word."""
    for result in results:
        for form in result.get("japanese", []):
            if word in (form.get("word"), form.get("reading")):
                return result
    return results[0]


class JishoProvider:
    """Online dictionary provider using Jisho.org API.

    Implements DictionaryProvider protocol. Unlike the offline provider,
    lookups can fail; network and HTTP errors raise DictionaryLookupError
    so the caller can report the definition stage as degraded.
    """

    def __init__(
        self,
        api_url: str = "https://jisho.org/api/v1/search/words",
        delay: float = 0.5,
        timeout: float = 10.0,
    ):
        """Initialize with API URL and rate-limiting delay.

        Args:
            api_url: Jisho API endpoint URL.
            delay: Seconds to wait before each API call.
            timeout: Request timeout in seconds.
        """
        self._api_url = api_url
        self._delay = delay
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "Jisho API"

    def is_available(self) -> bool:
        return True

    def load(self) -> bool:
        return True

    def _search(self, word: str) -> list[dict]:
        time.sleep(self._delay)
        try:
            response = requests.get(
                self._api_url,
                params={"keyword": word},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DictionaryLookupError(f"Jisho request failed: {e}") from e

        if response.status_code != 200:
            raise DictionaryLookupError(f"Jisho returned HTTP {response.status_code}")

        try:
            return response.json().get("data", [])
        except ValueError as e:
            raise DictionaryLookupError(f"Malformed Jisho response: {e}") from e

    def lookup(self, word: str) -> DictionaryEntry | None:
        """Look up word via Jisho API.

        Returns:
            DictionaryEntry with up to MAX_SENSES numbered senses, or None if
            Jisho has no English definition for the word.

        Raises:
            DictionaryLookupError: On network errors or malformed responses.
        """
        results = self._search(word)
        if not results:
            return None

        result = _pick_result(results, word)
        senses = [s for s in result.get("senses", []) if s.get("english_definitions")]
        if not senses:
            return None

        numbered = [
            f"{i}. {'; '.join(sense['english_definitions'])}"
            for i, sense in enumerate(senses[:MAX_SENSES], 1)
        ]
        part_of_speech = next(
            (s["parts_of_speech"][0] for s in senses if s.get("parts_of_speech")), ""
        )
        japanese = result.get("japanese") or [{}]
        logger.debug(f"Jisho definition for '{word}': {len(senses)} senses")
        return DictionaryEntry(
            headword=word,
            definition="<br>".join(numbered),
            part_of_speech=part_of_speech,
            reading=japanese[0].get("reading", ""),
        )
