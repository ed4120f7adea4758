"""
AI Classifier

用大模型为文件名给出分类提示 ({"catID", "category", "subCategory"})。
文件名按批 (默认5个) 发送, 结果按文件名缓存。

The hints are untrusted: SmartClassifier validates every catID against
the catalogue before using it.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from ..catalogue import TermCatalogue
from ..translation import TranslationService, Translator

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
TRAILING_COMMA = re.compile(r",\s*([}\]])")

HINT_KEYS = ("catID", "catShort", "category", "category_zh", "subCategory", "subCategory_zh")

CLASSIFICATION_PROMPT = """你是一个专业的音效分类专家, 严格按照UCS音效分类规则, 根据音效文件名给出分类信息。
你必须只使用下列有效的分类ID(CatID), 不要创造新的分类ID:
{cat_ids}

请只返回JSON, 格式如下:
{{
  "results": [
    {{
      "filename": "文件名",
      "classification": {{
        "catID": "分类ID",
        "category": "主分类英文名",
        "subCategory": "子分类英文名"
      }}
    }}
  ]
}}

无法确定的字段设为 null。

请分析以下音效文件名:
{filenames}"""


def _extract_json_text(response: str) -> Optional[str]:
    text = response.strip()
    if not text:
        return None
    try:
        json.loads(text)
        return text
    except json.JSONDecodeError:
        pass

    match = FENCED_JSON.search(text)
    if match:
        return match.group(1)

    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return None


def parse_classification_response(response: str, filenames: Sequence[str] = ()) -> Dict[str, Dict[str, Any]]:
    """
    解析AI响应

    Accepts a bare JSON object, a fenced ```json block or the outermost
    {...} span, after dropping control characters and trailing commas.

    Returns:
        filename -> hint; unparseable responses give an empty dict.
    """
    json_text = _extract_json_text(response or "")
    if json_text is None:
        logger.warning("No JSON found in AI classification response")
        return {}

    json_text = TRAILING_COMMA.sub(r"\1", CONTROL_CHARS.sub("", json_text))
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse AI classification response: {e}")
        return {}

    items = data.get("results", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        return {}

    results: Dict[str, Dict[str, Any]] = {}
    for item in items:
        if not isinstance(item, dict) or not item.get("filename"):
            continue
        classification = item.get("classification", item)
        if not isinstance(classification, dict):
            continue
        hint = {key: classification.get(key) for key in HINT_KEYS if classification.get(key)}
        if hint.get("catID"):
            results[str(item["filename"])] = hint

    for filename in filenames:
        if filename not in results:
            logger.debug(f"No AI classification for {filename!r}")
    return results


class AIClassifier:
    """
    AI分类助手

    Usage:
        ai = AIClassifier(translation_service, catalogue)
        hints = await ai.classify_batch(["glitch_01", "door slam"])
        hint = await ai.classify("footsteps snow")   # {} when unknown
    """

    BATCH_SIZE = 5
    MAX_PROMPT_CAT_IDS = 300

    def __init__(
        self,
        completer: Union[TranslationService, Translator],
        catalogue: Optional[TermCatalogue] = None,
        batch_size: int = BATCH_SIZE,
    ):
        self._completer = completer
        self._catalogue = catalogue
        self._batch_size = max(1, batch_size)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def clear_cache(self) -> None:
        self._cache.clear()

    def build_prompt(self, filenames: Sequence[str]) -> str:
        cat_ids: List[str] = []
        if self._catalogue is not None:
            cat_ids = [
                f"- {t.cat_id} ({t.category} / {t.source})"
                for t in self._catalogue.terms[: self.MAX_PROMPT_CAT_IDS]
            ]
        return CLASSIFICATION_PROMPT.format(
            cat_ids="\n".join(cat_ids) or "- (任何UCS标准CatID)",
            filenames="\n".join(filenames),
        )

    async def classify(self, filename: str) -> Dict[str, Any]:
        """Hint for one file name, {} when the model gave none."""
        results = await self.classify_batch([filename])
        return results.get(filename, {})

    async def classify_batch(self, filenames: Sequence[str]) -> Dict[str, Dict[str, Any]]:
        """
        Classify several file names, batch_size names per request.

        Failed batches are logged and left out of the result.
        """
        pending = [f for f in dict.fromkeys(filenames) if f and f not in self._cache]

        for start in range(0, len(pending), self._batch_size):
            batch = pending[start:start + self._batch_size]
            try:
                response = await self._completer.complete(self.build_prompt(batch))
            except NotImplementedError:
                logger.warning("Translator has no completion support, skipping AI classification")
                break
            except Exception as e:
                logger.warning(f"AI classification failed for {len(batch)} files: {type(e).__name__}: {e}")
                continue
            parsed = parse_classification_response(response, batch)
            self._cache.update(parsed)
            logger.info(f"AI classified {len(parsed)}/{len(batch)} files")

        return {f: dict(self._cache[f]) for f in filenames if f in self._cache}
