"""Client for an OpenAI-compatible chat completions endpoint."""

import base64
import logging

import requests

from image2card.exceptions import ProviderError

logger = logging.getLogger(__name__)


def guess_image_mime(image_bytes: bytes) -> str:
    """Guess the MIME type of an encoded image from its signature."""
    if image_bytes.startswith(b"\x89PNG"):
        return "image/png"
    if image_bytes.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/png"


class RemoteModelClient:
    """Send text (and optionally an image) prompts to a remote language model.

    The active model is mutable runtime configuration; callers must not
    issue two differently-configured requests against one client concurrently.
    """

    def __init__(
        self,
        provider_id: str,
        name: str,
        api_url: str,
        api_key: str,
        model: str = "",
        timeout: float = 120.0,
    ):
        """Initialize the client.

        Args:
            provider_id: Identifier, e.g. "xai"
            name: Display name, e.g. "xAI"
            api_url: Base URL ending before "/chat/completions"
            api_key: Bearer token
            model: Initial model name or "Provider/model" label
            timeout: Request timeout in seconds
        """
        self.id = provider_id
        self.name = name
        self._api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self.model = ""
        if model:
            self.set_model(model)

    def is_available(self) -> bool:
        return bool(self._api_key)

    def set_model(self, model_label: str) -> None:
        """Select the model; the "Provider/" prefix of a label is dropped."""
        self.model = model_label.split("/", 1)[1] if "/" in model_label else model_label

    def complete(self, prompt: str, image_bytes: bytes | None = None) -> str:
        """Run one chat completion.

        Args:
            prompt: User prompt
            image_bytes: Optional encoded image sent alongside the prompt

        Returns:
            The model's reply text, stripped

        Raises:
            ProviderError: On missing credentials, HTTP errors or malformed responses
        """
        if not self.is_available() or not self.model:
            raise ProviderError(f"{self.name}: API key or model is missing")

        content: str | list[dict] = prompt
        if image_bytes:
            encoded = base64.b64encode(image_bytes).decode("ascii")
            content = [
                {"type": "text", "text": prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{guess_image_mime(image_bytes)};base64,{encoded}"},
                },
            ]

        try:
            response = requests.post(
                f"{self._api_url}/chat/completions",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "model": self.model,
                    "messages": [{"role": "user", "content": content}],
                    "temperature": 0,
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"{self.name} HTTP {response.status_code}: {response.text[:200]}")
            raise ProviderError(f"{self.name} returned HTTP {response.status_code}")

        try:
            reply = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Malformed {self.name} response") from e

        logger.debug(f"{self.name} ({self.model}) replied with {len(reply or '')} characters")
        return (reply or "").strip()
