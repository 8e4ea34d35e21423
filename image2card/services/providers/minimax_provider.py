"""MiniMax speech synthesis provider."""

import logging

import requests

from image2card.exceptions import SynthesisError
from image2card.models import Voice

logger = logging.getLogger(__name__)

# Sort order of voice categories in the voice list
_CATEGORIES = ("system_voice", "voice_cloning", "voice_generation")


class MiniMaxSpeechProvider:
    """Synthesize speech with the MiniMax T2A v2 API.

    Implements SpeechProvider protocol. Audio is always returned as MP3.
    """

    def __init__(
        self,
        api_key: str,
        voice_id: str = "Japanese_GentleButler",
        model: str = "speech-2.6-hd",
        voice_prefix: str = "Japanese_",
        timeout: float = 120.0,
        api_url: str = "https://api.minimax.io/v1",
    ):
        """Initialize the provider.

        Args:
            api_key: MiniMax API key
            voice_id: Default voice
            model: Synthesis model
            voice_prefix: Only system voices with this id prefix are listed
            timeout: Request timeout in seconds
            api_url: API base URL
        """
        self._api_key = api_key
        self._voice_id = voice_id
        self._model = model
        self._voice_prefix = voice_prefix
        self._timeout = timeout
        self._api_url = api_url.rstrip("/")
        self._voices: list[Voice] = []

    @property
    def id(self) -> str:
        return "minimax"

    @property
    def name(self) -> str:
        return "MiniMax"

    @property
    def voices(self) -> list[Voice]:
        return list(self._voices)

    def is_available(self) -> bool:
        return bool(self._api_key)

    def _post(self, endpoint: str, payload: dict) -> dict:
        """POST JSON and return the body, checking MiniMax's base_resp status."""
        try:
            response = requests.post(
                f"{self._api_url}/{endpoint}",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise SynthesisError(f"MiniMax request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"MiniMax HTTP {response.status_code}: {response.text[:200]}")
            raise SynthesisError(f"MiniMax returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise SynthesisError(f"Malformed MiniMax response: {e}") from e

        status = body.get("base_resp", {})
        if status.get("status_code") != 0:
            raise SynthesisError(f"MiniMax API error: {status.get('status_msg', 'Unknown error')}")
        return body

    def load_voices(self) -> list[Voice]:
        """Fetch system voices for the configured language plus custom voices.

        Raises:
            SynthesisError: If the request fails
        """
        if not self._api_key:
            raise SynthesisError("MiniMax API key is missing")

        body = self._post("get_voice", {"voice_type": "all"})

        voices = []
        for category in _CATEGORIES:
            for item in body.get(category) or []:
                voice_id = item.get("voice_id")
                if not voice_id:
                    continue
                if category == "system_voice":
                    if not voice_id.startswith(self._voice_prefix):
                        continue
                    name = item.get("voice_name", voice_id)
                else:
                    name = voice_id
                voices.append(Voice(voice_id, name, category))

        self._voices = sorted(voices, key=lambda v: (v.category, v.name))
        logger.info(f"Loaded {len(self._voices)} MiniMax voices")
        return self.voices

    def audio_extension(self, audio_format: str) -> str:
        return "mp3"

    def synthesize(
        self,
        text: str,
        voice_id: str = "",
        language_code: str = "",
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech for text.

        Raises:
            SynthesisError: On missing credentials, API errors or undecodable audio
        """
        target_voice = voice_id or self._voice_id
        if not self._api_key or not target_voice:
            raise SynthesisError("MiniMax API key or voice ID is missing")

        if audio_format != "mp3":
            logger.warning(f"MiniMax does not support {audio_format}, returning mp3")

        payload = {
            "model": self._model,
            "text": text,
            "stream": False,
            "voice_setting": {"voice_id": target_voice, "speed": 1.0, "vol": 1.0, "pitch": 0},
            "audio_setting": {"sample_rate": 32000, "bitrate": 128000, "format": "mp3", "channel": 1},
            "output_format": "hex",
        }
        if language_code:
            payload["language_boost"] = language_code

        body = self._post("t2a_v2", payload)

        try:
            audio = bytes.fromhex(body["data"]["audio"])
        except (KeyError, TypeError, ValueError) as e:
            raise SynthesisError(f"MiniMax response has no audio: {e}") from e

        logger.info(f"Generated audio with MiniMax model {self._model}, size: {len(audio)} bytes")
        return audio
