"""Translation through a remote language model."""

from image2card.exceptions import ProviderError, TranslationError

from .remote_model_client import RemoteModelClient

_PROMPT = (
    "Translate the following Japanese sentence into natural {language}. "
    "Reply with the translation only.\n\n{text}"
)


class ModelTranslator:
    """Translate sentences by prompting a remote chat model.

    Implements Translator and ModelConfigurable protocols.
    """

    def __init__(self, client: RemoteModelClient, target_language: str = "English"):
        self._client = client
        self._target_language = target_language

    @property
    def id(self) -> str:
        return "model"

    @property
    def name(self) -> str:
        return f"{self._client.name} ({self._client.model or 'no model'})"

    def set_model(self, model_label: str) -> None:
        self._client.set_model(model_label)

    def is_available(self) -> bool:
        return self._client.is_available()

    def translate(self, text: str) -> str:
        if not text.strip():
            return ""
        prompt = _PROMPT.format(language=self._target_language, text=text)
        try:
            return self._client.complete(prompt)
        except ProviderError as e:
            raise TranslationError(f"Model translation failed: {e}") from e
