"""
OpenAI Compatible Translator

通用的OpenAI兼容API翻译实现 (chat/completions)。
每次调用只请求一次, 失败时抛出 TranslationError。
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Dict, List, Optional

import aiohttp

from ...domain.exceptions import TranslationError
from .base import AIServiceConfig, Translator

logger = logging.getLogger(__name__)

API_VERSION_SUFFIX = re.compile(r"/v\d+$")

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Simplified Chinese",
    "zh-tw": "Traditional Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}

TRANSLATION_PROMPT = """You are a professional sound effect translator.
Translate the given audio filename from {source} to {target}.
Use standard audio post-production terminology.
Output ONLY the translated name, without quotes, file extension or explanation."""

REVERSE_TRANSLATION_PROMPT = """You are a professional sound effect translator.
Translate the given Chinese audio filename into concise English.
Use standard audio post-production terminology.
Output ONLY the English name, without quotes or explanation."""

STANDARDIZE_PROMPT = """You are a sound effects librarian.
Describe the sound named by the given filename in 2 to 5 English words,
most specific noun first (e.g. "Door Wood Slam", "Footsteps Snow").
Output ONLY the description, without numbering, quotes or explanation."""


class OpenAICompatibleTranslator(Translator):
    """
    OpenAI兼容API翻译器

    Usage:
        translator = OpenAICompatibleTranslator(AIServiceConfig(
            api_key="sk-...", base_url="https://api.deepseek.com", model_name="deepseek-chat"))
        zh = await translator.translate("Door Slam")
    """

    SERVICE_ID = "openai_compatible"
    SERVICE_NAME = "OpenAI Compatible"

    def __init__(self, config: AIServiceConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def config(self) -> AIServiceConfig:
        return self._config

    @property
    def supports_completion(self) -> bool:
        return True

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取HTTP会话"""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def cleanup(self) -> None:
        """清理资源"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _get_api_url(self) -> str:
        """获取API URL"""
        base_url = self._config.base_url.strip().rstrip("/")
        if not base_url:
            raise TranslationError("No base_url configured for the translation service")

        # 已包含完整路径
        if "/chat/completions" in base_url:
            return base_url

        # 确保以 /v1 结尾（兼容 Ollama/LM Studio）
        if not base_url.endswith("/v1"):
            base_url = API_VERSION_SUFFIX.sub("", base_url) + "/v1"
        return f"{base_url}/chat/completions"

    def _get_headers(self) -> Dict[str, str]:
        """获取请求头"""
        headers = {"Content-Type": "application/json"}
        if self._config.api_key and self._config.api_key.strip():
            headers["Authorization"] = f"Bearer {self._config.api_key.strip()}"
        elif (self._config.provider_id or "").lower() == "local":
            # Ollama 需要 Authorization 头, 但忽略其值
            headers["Authorization"] = "Bearer ollama"
        return headers

    @staticmethod
    def _parse_error(status_code: int, error_text: str) -> str:
        """解析错误信息"""
        try:
            error_data = json.loads(error_text)
            error_msg = error_data.get("error", {}).get("message", error_text)
        except (json.JSONDecodeError, AttributeError):
            error_msg = error_text[:200]

        if status_code == 401:
            return "API key rejected (401)"
        if status_code == 404:
            return f"Model or endpoint not found (404): {error_msg}"
        if status_code == 429:
            return "Rate limited (429)"
        return f"API error ({status_code}): {error_msg}"

    @staticmethod
    def clean_output(content: str) -> str:
        """Keep the first non-empty line, without wrapping quotes."""
        for line in content.strip().splitlines():
            line = line.strip().strip('"\'“”‘’`').strip()
            if line:
                return line
        return ""

    async def _chat(self, messages: List[Dict[str, str]]) -> str:
        payload = {
            "model": self._config.model_name.strip(),
            "messages": messages,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

        try:
            session = await self._get_session()
            async with session.post(
                self._get_api_url(),
                headers=self._get_headers(),
                json=payload,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise TranslationError(self._parse_error(response.status, error_text))
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise TranslationError("Translation request timed out") from e
        except aiohttp.ClientError as e:
            raise TranslationError(f"Translation request failed: {e}") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected response shape: {str(data)[:200]}") from e

    async def _ask(self, system_prompt: str, text: str) -> str:
        content = await self._chat([
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": text},
        ])
        result = self.clean_output(content)
        if not result:
            raise TranslationError(f"Empty response for {text!r}")
        return result

    async def translate(self, text: str, source_lang: str = "en", target_lang: str = "zh") -> str:
        prompt = TRANSLATION_PROMPT.format(
            source=LANGUAGE_NAMES.get(source_lang, source_lang),
            target=LANGUAGE_NAMES.get(target_lang, target_lang),
        )
        return await self._ask(prompt, text)

    async def reverse_translate(self, text: str) -> str:
        return await self._ask(REVERSE_TRANSLATION_PROMPT, text)

    async def standardize(self, text: str) -> str:
        return await self._ask(STANDARDIZE_PROMPT, text)

    async def complete(self, prompt: str) -> str:
        return await self._chat([{"role": "user", "content": prompt}])
