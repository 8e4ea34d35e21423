"""DeepL translation provider."""

import logging

import requests

from image2card.exceptions import TranslationError

logger = logging.getLogger(__name__)

_FREE_API_URL = "https://api-free.deepl.com/v2/translate"
_PRO_API_URL = "https://api.deepl.com/v2/translate"


class DeepLTranslator:
    """Translate sentences with the DeepL REST API.

    Implements Translator protocol.
    """

    def __init__(
        self,
        api_key: str,
        use_free_api: bool = True,
        source_lang: str = "JA",
        target_lang: str = "EN",
        timeout: float = 30.0,
    ):
        self._api_key = api_key
        self._url = _FREE_API_URL if use_free_api else _PRO_API_URL
        self._source_lang = source_lang
        self._target_lang = target_lang
        self._timeout = timeout

    @property
    def id(self) -> str:
        return "deepl"

    @property
    def name(self) -> str:
        return "DeepL"

    def is_available(self) -> bool:
        return bool(self._api_key)

    def translate(self, text: str) -> str:
        """Translate text from the source to the target language.

        Raises:
            TranslationError: On missing key, network errors or malformed responses
        """
        if not text.strip():
            return ""
        if not self._api_key:
            raise TranslationError("DeepL API key is missing")

        try:
            response = requests.post(
                self._url,
                headers={"Authorization": f"DeepL-Auth-Key {self._api_key}"},
                data={
                    "text": text,
                    "source_lang": self._source_lang,
                    "target_lang": self._target_lang,
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TranslationError(f"DeepL request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"DeepL HTTP {response.status_code}: {response.text[:200]}")
            raise TranslationError(f"DeepL returned HTTP {response.status_code}")

        try:
            return response.json()["translations"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Malformed DeepL response: {e}") from e
