"""ElevenLabs speech synthesis provider."""

import logging

import requests

from image2card.exceptions import SynthesisError
from image2card.models import Voice

logger = logging.getLogger(__name__)


class ElevenLabsSpeechProvider:
    """Synthesize speech with the ElevenLabs REST API.

    Implements SpeechProvider protocol.
    """

    def __init__(
        self,
        api_key: str,
        voice_id: str = "",
        model: str = "eleven_multilingual_v2",
        timeout: float = 120.0,
        api_url: str = "https://api.elevenlabs.io/v1",
    ):
        self._api_key = api_key
        self._voice_id = voice_id
        self._model = model
        self._timeout = timeout
        self._api_url = api_url.rstrip("/")
        self._voices: list[Voice] = []

    @property
    def id(self) -> str:
        return "elevenlabs"

    @property
    def name(self) -> str:
        return "ElevenLabs"

    @property
    def voices(self) -> list[Voice]:
        return list(self._voices)

    def is_available(self) -> bool:
        return bool(self._api_key)

    def load_voices(self) -> list[Voice]:
        """Fetch the account's voices, sorted by name.

        Raises:
            SynthesisError: If the request fails
        """
        if not self._api_key:
            raise SynthesisError("ElevenLabs API key is missing")

        try:
            response = requests.get(
                f"{self._api_url}/voices",
                headers={"xi-api-key": self._api_key},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise SynthesisError(f"ElevenLabs request failed: {e}") from e

        if response.status_code != 200:
            raise SynthesisError(f"Error loading voices: HTTP {response.status_code}")

        try:
            items = response.json().get("voices", [])
        except ValueError as e:
            raise SynthesisError(f"Malformed ElevenLabs response: {e}") from e

        voices = [
            Voice(item["voice_id"], item["name"], item.get("category", ""))
            for item in items
            if "voice_id" in item and "name" in item
        ]
        self._voices = sorted(voices, key=lambda v: v.name)
        logger.info(f"Loaded {len(self._voices)} ElevenLabs voices")
        return self.voices

    def audio_extension(self, audio_format: str) -> str:
        return "opus" if audio_format == "opus" else "mp3"

    def synthesize(
        self,
        text: str,
        voice_id: str = "",
        language_code: str = "",
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech for text.

        Args:
            text: Text to speak
            voice_id: Voice override (defaults to the configured voice)
            language_code: Optional ISO 639-1 language hint
            audio_format: "mp3" or "opus"

        Returns:
            Encoded audio bytes

        Raises:
            SynthesisError: On missing credentials or a failed request
        """
        target_voice = voice_id or self._voice_id
        if not self._api_key or not target_voice:
            raise SynthesisError("ElevenLabs API key or voice ID is missing")

        opus = audio_format == "opus"
        payload = {
            "text": text,
            "model_id": self._model,
            "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
        }
        if language_code:
            payload["language_code"] = language_code

        try:
            response = requests.post(
                f"{self._api_url}/text-to-speech/{target_voice}",
                headers={
                    "xi-api-key": self._api_key,
                    "Accept": "audio/opus" if opus else "audio/mpeg",
                },
                params={"output_format": "opus_48000_64" if opus else "mp3_44100_128"},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise SynthesisError(f"ElevenLabs request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"ElevenLabs HTTP {response.status_code}: {response.text[:200]}")
            raise SynthesisError(f"ElevenLabs returned HTTP {response.status_code}")

        logger.info(f"Generated {audio_format} audio, size: {len(response.content)} bytes")
        return response.content
