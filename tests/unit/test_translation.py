from __future__ import annotations

import asyncio

import pytest

from sfx_renamer.application.translation import (
    AIServiceConfig,
    GlossaryTranslator,
    OpenAICompatibleTranslator,
    TranslationService,
    Translator,
)
from sfx_renamer.domain.exceptions import TranslationError


class FakeTranslator(Translator):
    SERVICE_ID = "fake"
    SERVICE_NAME = "Fake"

    def __init__(self, result="门", error=None):
        self.result = result
        self.error = error
        self.calls = 0

    async def _answer(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result

    async def translate(self, text, source_lang="en", target_lang="zh"):
        return await self._answer()

    async def reverse_translate(self, text):
        return await self._answer()

    async def standardize(self, text):
        return await self._answer()


def run(coro):
    return asyncio.run(coro)


# ----------------------------------------------------------------------
# Glossary translator
# ----------------------------------------------------------------------

def test_glossary_english_to_chinese(catalogue):
    translator = GlossaryTranslator(catalogue)
    assert run(translator.translate("Door Slam")) == "木门"
    assert run(translator.translate("footsteps snow")) == "脚步声 snow"
    assert run(translator.translate("boxes")) == "boxes"


def test_user_glossary_takes_precedence(catalogue):
    translator = GlossaryTranslator(catalogue, {"snow": "雪", "wind": "大风"})
    assert run(translator.translate("footsteps snow")) == "脚步声雪"
    assert run(translator.translate("wind")) == "大风"


def test_glossary_chinese_to_english(catalogue):
    translator = GlossaryTranslator(catalogue)
    assert run(translator.reverse_translate("脚步声")) == "Footstep"
    assert run(translator.reverse_translate("关门声")) == "Door Wood"
    assert run(translator.reverse_translate("轻轻的脚步声")) == "轻轻的 Footstep"
    assert run(translator.translate("风声", "zh", "en")) == "Wind"


def test_glossary_standardize(catalogue):
    translator = GlossaryTranslator(catalogue)
    assert run(translator.standardize("door-slam heavy!")) == "Door Slam Heavy"
    assert run(translator.standardize("风声")) == "Wind"
    assert run(translator.standardize("a b c d e f g")) == "A B C D E"


def test_glossary_without_catalogue():
    translator = GlossaryTranslator(glossary={"Door": "门"})
    assert len(translator) == 1
    assert run(translator.translate("door")) == "门"
    assert run(translator.reverse_translate("门")) == "door"
    assert run(translator.translate("door", "en", "fr")) == "door"


def test_glossary_cannot_complete():
    with pytest.raises(NotImplementedError):
        run(GlossaryTranslator().complete("prompt"))
    assert GlossaryTranslator().supports_completion is False


# ----------------------------------------------------------------------
# Translation service
# ----------------------------------------------------------------------

def test_service_caches_results():
    translator = FakeTranslator()
    service = TranslationService(translator)

    assert run(service.translate("Door")) == "门"
    assert run(service.translate("Door")) == "门"
    assert translator.calls == 1
    assert service.cache_stats()["hits"] == 1

    service.clear_cache()
    run(service.translate("Door"))
    assert translator.calls == 2


def test_service_pass_through_rules():
    translator = FakeTranslator()
    service = TranslationService(translator)

    assert run(service.translate("")) == ""
    assert run(service.translate("关门声")) == "关门声"
    assert run(service.translate("door", "zh", "en")) == "door"
    assert run(service.reverse_translate("door")) == "door"
    assert run(service.standardize("123")) == "123"
    assert translator.calls == 0


def test_service_wraps_provider_errors():
    service = TranslationService(FakeTranslator(error=RuntimeError("boom")))
    with pytest.raises(TranslationError):
        run(service.translate("Door"))

    service = TranslationService(FakeTranslator(error=TranslationError("offline")))
    with pytest.raises(TranslationError, match="offline"):
        run(service.reverse_translate("关门"))


def test_service_rejects_empty_result():
    service = TranslationService(FakeTranslator(result="  "))
    with pytest.raises(TranslationError):
        run(service.standardize("door"))


def test_service_completion_errors_become_translation_errors():
    service = TranslationService(FakeTranslator())
    assert service.supports_completion is False
    with pytest.raises(TranslationError):
        run(service.complete("prompt"))


# ----------------------------------------------------------------------
# OpenAI compatible translator (no network)
# ----------------------------------------------------------------------

@pytest.mark.parametrize("base_url, expected", [
    ("https://api.deepseek.com", "https://api.deepseek.com/v1/chat/completions"),
    ("https://api.deepseek.com/v1/", "https://api.deepseek.com/v1/chat/completions"),
    ("http://localhost:11434/v2", "http://localhost:11434/v1/chat/completions"),
    ("https://vapi.example.com", "https://vapi.example.com/v1/chat/completions"),
    ("https://host/custom/chat/completions", "https://host/custom/chat/completions"),
])
def test_api_url(base_url, expected):
    translator = OpenAICompatibleTranslator(AIServiceConfig(base_url=base_url))
    assert translator._get_api_url() == expected


def test_api_url_required():
    with pytest.raises(TranslationError):
        OpenAICompatibleTranslator(AIServiceConfig())._get_api_url()


def test_headers_and_errors():
    local = OpenAICompatibleTranslator(AIServiceConfig(provider_id="local"))
    assert local._get_headers()["Authorization"] == "Bearer ollama"

    keyed = OpenAICompatibleTranslator(AIServiceConfig(api_key=" sk-1 "))
    assert keyed._get_headers()["Authorization"] == "Bearer sk-1"

    assert OpenAICompatibleTranslator._parse_error(401, "") == "API key rejected (401)"
    assert "bad model" in OpenAICompatibleTranslator._parse_error(404, '{"error": {"message": "bad model"}}')


def test_clean_output():
    assert OpenAICompatibleTranslator.clean_output('\n"关门声"\nexplanation') == "关门声"
    assert OpenAICompatibleTranslator.clean_output("   ") == ""


def test_service_config_round_trip():
    config = AIServiceConfig(api_key="k", base_url="u", model_name="m", extra={"a": 1})
    assert AIServiceConfig.from_dict(config.to_dict()) == config
