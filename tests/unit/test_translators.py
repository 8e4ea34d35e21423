"""Tests for the translation providers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from image2card.exceptions import ProviderError, TranslationError
from image2card.services.providers.deepl_translator import DeepLTranslator
from image2card.services.providers.model_translator import ModelTranslator
from image2card.services.providers.none_translator import NoneTranslator

DEEPL_POST = "image2card.services.providers.deepl_translator.requests.post"


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = "error body"
    response.json.return_value = payload
    return response


class TestDeepLTranslator:
    """Tests for DeepLTranslator."""

    def test_available_only_with_key(self):
        assert DeepLTranslator("key").is_available() is True
        assert DeepLTranslator("").is_available() is False

    def test_translate_free_api(self):
        payload = {"translations": [{"text": "I read a book."}]}
        with patch(DEEPL_POST, return_value=_response(payload=payload)) as mock_post:
            result = DeepLTranslator("secret").translate("本を読んだ")

        assert result == "I read a book."
        assert mock_post.call_args.args[0] == "https://api-free.deepl.com/v2/translate"
        assert mock_post.call_args.kwargs["headers"] == {"Authorization": "DeepL-Auth-Key secret"}
        assert mock_post.call_args.kwargs["data"] == {
            "text": "本を読んだ",
            "source_lang": "JA",
            "target_lang": "EN",
        }

    def test_translate_pro_api(self):
        payload = {"translations": [{"text": "ok"}]}
        with patch(DEEPL_POST, return_value=_response(payload=payload)) as mock_post:
            DeepLTranslator("secret", use_free_api=False, target_lang="DE").translate("猫")

        assert mock_post.call_args.args[0] == "https://api.deepl.com/v2/translate"
        assert mock_post.call_args.kwargs["data"]["target_lang"] == "DE"

    def test_blank_text_skips_request(self):
        with patch(DEEPL_POST) as mock_post:
            assert DeepLTranslator("secret").translate("   ") == ""
        mock_post.assert_not_called()

    def test_missing_key(self):
        with pytest.raises(TranslationError, match="API key is missing"):
            DeepLTranslator("").translate("猫")

    def test_http_error(self):
        with patch(DEEPL_POST, return_value=_response(status_code=403)):
            with pytest.raises(TranslationError, match="HTTP 403"):
                DeepLTranslator("secret").translate("猫")

    def test_network_error(self):
        with patch(DEEPL_POST, side_effect=requests.Timeout("timed out")):
            with pytest.raises(TranslationError, match="DeepL request failed"):
                DeepLTranslator("secret").translate("猫")

    def test_malformed_response(self):
        with patch(DEEPL_POST, return_value=_response(payload={"translations": []})):
            with pytest.raises(TranslationError, match="Malformed DeepL response"):
                DeepLTranslator("secret").translate("猫")

    def test_translation_error_is_provider_error(self):
        assert issubclass(TranslationError, ProviderError)


class TestModelTranslator:
    """Tests for ModelTranslator."""

    def _client(self):
        client = MagicMock()
        client.name = "xAI"
        client.model = "grok-3-mini"
        client.is_available.return_value = True
        return client

    def test_identity(self):
        translator = ModelTranslator(self._client())
        assert translator.id == "model"
        assert translator.name == "xAI (grok-3-mini)"

    def test_translate_prompts_model(self):
        client = self._client()
        client.complete.return_value = "I read a book."

        result = ModelTranslator(client, target_language="English").translate("本を読んだ")

        assert result == "I read a book."
        prompt = client.complete.call_args.args[0]
        assert "English" in prompt
        assert prompt.endswith("本を読んだ")

    def test_set_model_delegates(self):
        client = self._client()
        ModelTranslator(client).set_model("xAI/grok-3")
        client.set_model.assert_called_once_with("xAI/grok-3")

    def test_blank_text(self):
        client = self._client()
        assert ModelTranslator(client).translate("") == ""
        client.complete.assert_not_called()

    def test_failure_becomes_translation_error(self):
        client = self._client()
        client.complete.side_effect = ProviderError("xAI returned HTTP 429")

        with pytest.raises(TranslationError, match="Model translation failed"):
            ModelTranslator(client).translate("猫")


class TestNoneTranslator:
    def test_always_available_and_empty(self):
        translator = NoneTranslator()
        assert translator.id == "none"
        assert translator.is_available() is True
        assert translator.translate("本を読んだ") == ""
