"""
External NLP Service Client

Calls a Chinese POS tagging service (GetPosChGeneral) through an HTTP
proxy and converts its tags into WordInfo records.
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from ...core.config import NLPServiceSettings
from ...domain.exceptions import NLPServiceError
from ...domain.models import PartOfSpeech, WordInfo, WordSource

logger = logging.getLogger(__name__)

# 服务端词性标记 -> (词性, 权重)
SERVICE_POS_MAP: Dict[str, Tuple[PartOfSpeech, float]] = {
    "NN": (PartOfSpeech.NOUN, 120),
    "NR": (PartOfSpeech.NOUN, 120),
    "NS": (PartOfSpeech.NOUN, 120),
    "NT": (PartOfSpeech.NOUN, 120),
    "VV": (PartOfSpeech.VERB, 70),
    "VA": (PartOfSpeech.VERB, 70),
    "VC": (PartOfSpeech.VERB, 70),
    "VE": (PartOfSpeech.VERB, 70),
    "JJ": (PartOfSpeech.ADJECTIVE, 80),
    "AD": (PartOfSpeech.ADVERB, 40),
    "CD": (PartOfSpeech.NOUN, 60),
    "LC": (PartOfSpeech.NOUN, 60),
    "PU": (PartOfSpeech.OTHER, 5),
}
DEFAULT_SERVICE_POS = (PartOfSpeech.OTHER, 20)


def map_service_pos(tag: str) -> Tuple[PartOfSpeech, float]:
    return SERVICE_POS_MAP.get((tag or "").upper(), DEFAULT_SERVICE_POS)


class NLPServiceClient:
    """
    Async client for the external POS tagging service.

    A fixed number of requests is allowed per calendar day; beyond that the
    client raises NLPServiceError without calling the service.
    """

    ACTION = "GetPosChGeneral"

    def __init__(self, settings: NLPServiceSettings):
        self._settings = settings
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_day = datetime.date.today()
        self._request_count = 0

    @property
    def enabled(self) -> bool:
        return self._settings.enabled and bool(self._settings.endpoint)

    @property
    def requests_today(self) -> int:
        self._roll_day()
        return self._request_count

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取HTTP会话"""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def cleanup(self) -> None:
        """清理资源"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _roll_day(self) -> None:
        today = datetime.date.today()
        if today != self._request_day:
            self._request_day = today
            self._request_count = 0

    def _build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "action": self.ACTION,
            "accessKeyId": self._settings.access_key_id,
            "accessKeySecret": self._settings.access_key_secret,
            "region": self._settings.region,
            "params": {"Text": text, "ServiceCode": "alinlp", "OutType": "1"},
        }

    async def analyze_pos(self, text: str) -> List[WordInfo]:
        """
        Tag text with the remote service.

        Raises:
            NLPServiceError: Disabled, over the daily limit, HTTP or payload error
            aiohttp.ClientError / asyncio.TimeoutError: Network failures
        """
        if not self.enabled:
            raise NLPServiceError("NLP service is disabled")

        self._roll_day()
        if self._request_count >= self._settings.daily_limit:
            raise NLPServiceError(f"Daily request limit reached ({self._settings.daily_limit})")
        self._request_count += 1

        session = await self._get_session()
        async with session.post(
            self._settings.endpoint,
            json=self._build_payload(text),
            headers={"Accept": "application/json"},
        ) as response:
            body = await response.text()
            if response.status != 200:
                raise NLPServiceError(f"NLP service error ({response.status}): {body[:200]}")

        return self.parse_response(body)

    @staticmethod
    def parse_response(body: str) -> List[WordInfo]:
        """
        Parse a service response.

        The envelope carries a JSON string in "Data" whose "result" is a list
        of {"word", "pos"} items.
        """
        try:
            envelope = json.loads(body)
            if envelope.get("Code") not in (None, "200", 200):
                raise NLPServiceError(f"NLP service returned {envelope.get('Code')}: {envelope.get('Message')}")
            data = envelope.get("Data", envelope)
            if isinstance(data, str):
                data = json.loads(data)
        except (json.JSONDecodeError, AttributeError) as e:
            raise NLPServiceError(f"Malformed NLP response: {e}") from e

        if not isinstance(data, dict) or data.get("success") is False:
            raise NLPServiceError("NLP service reported failure")

        items = data.get("result")
        if not isinstance(items, list) or not items:
            raise NLPServiceError("NLP service returned no words")

        words: List[WordInfo] = []
        for item in items:
            if not isinstance(item, dict) or not item.get("word"):
                continue
            pos, weight = map_service_pos(item.get("pos", ""))
            words.append(WordInfo(str(item["word"]).strip(), pos, weight, WordSource.ORIGINAL))

        if not words:
            raise NLPServiceError("NLP service returned no usable words")
        logger.debug(f"NLP service tagged {len(words)} words")
        return words
