"""
File Processor

逐个处理文件: 序号提取 -> 语言检测 -> 翻译 -> 分类 -> 命名。

Files are processed strictly one after another. A pause request takes
effect between two files; the file in progress always completes. A failing
file is marked as error and the batch moves on.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ...core.config import AppSettings
from ...core.utils import contains_latin, is_chinese_text
from ...domain.exceptions import ProcessingError, RenameError, TranslationError
from ...domain.interfaces import HostFileAPI
from ...domain.models import (
    FileRecord,
    FileStatus,
    WordInfo,
    WordSource,
    get_category_chinese_name,
)
from ..catalogue import TermCatalogue
from ..classification import AIClassifier, SmartClassifier
from ..matching import MatchingEngine, create_engine
from ..naming_manager import (
    NamingFormatter,
    NamingValidator,
    extract_number,
    normalize_chinese_text,
    normalize_english_text,
)
from ..tokenizer import PosAnalyzer
from ..translation import TranslationService, Translator

logger = logging.getLogger(__name__)

# (current, total, record)
ProgressCallback = Callable[[int, int, FileRecord], None]


@dataclass
class BatchResult:
    """Result of one process_files() run."""
    total_files: int = 0
    successful_files: int = 0
    failed_files: int = 0
    records: List[FileRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.failed_files == 0

    @property
    def duration_seconds(self) -> float:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'total_files': self.total_files,
            'successful_files': self.successful_files,
            'failed_files': self.failed_files,
            'errors': list(self.errors),
            'duration_seconds': self.duration_seconds,
        }


@dataclass
class RenameOutcome:
    """Result of renaming one file."""
    id: str
    success: bool
    message: str = ""
    new_name: str = ""
    skipped: bool = False


def records_from_items(
    items: Iterable[Mapping[str, Any]],
    audio_extensions: Optional[Iterable[str]] = None,
) -> List[FileRecord]:
    """
    Build FileRecords from host items, keeping audio files only.

    Items are mappings with id, name, ext, tags and path; the 1-based
    sequence follows the kept items' order.
    """
    allowed = {e.lower().lstrip(".") for e in (audio_extensions or AppSettings().pipeline.audio_extensions)}
    records: List[FileRecord] = []
    for item in items:
        extension = str(item.get("ext") or "").lower().lstrip(".")
        if extension not in allowed:
            continue
        path = item.get("path")
        records.append(FileRecord(
            id=str(item.get("id", "")),
            name=str(item.get("name", "")),
            extension=str(item.get("ext") or "").lstrip("."),
            path=Path(path) if path else None,
            tags=list(item.get("tags") or []),
            sequence=len(records) + 1,
        ))
    return records


class FileProcessor:
    """
    文件处理器

    Owns one analyzer, one engine, one classifier and one catalogue, all
    passed in by the caller.

    Usage:
        processor = FileProcessor.create(catalogue, GlossaryTranslator(catalogue))
        result = await processor.process_files(records)
        outcomes = await processor.execute_rename(result.records, host)
    """

    def __init__(
        self,
        catalogue: TermCatalogue,
        analyzer: PosAnalyzer,
        engine: MatchingEngine,
        classifier: SmartClassifier,
        translation_service: Optional[TranslationService] = None,
        settings: Optional[AppSettings] = None,
        ai_classifier: Optional[AIClassifier] = None,
        formatter: Optional[NamingFormatter] = None,
    ):
        self._catalogue = catalogue
        self._analyzer = analyzer
        self._engine = engine
        self._classifier = classifier
        self._translation = translation_service
        self._settings = settings or AppSettings()
        self._ai_classifier = ai_classifier
        self._formatter = formatter or NamingFormatter(self._settings.naming)
        self._validator = NamingValidator()

        self._is_processing = False
        self._resume_event = asyncio.Event()
        self._resume_event.set()

    @classmethod
    def create(
        cls,
        catalogue: TermCatalogue,
        translator: Optional[Translator] = None,
        settings: Optional[AppSettings] = None,
    ) -> 'FileProcessor':
        """Wire the default analyzer, engine and classifier for a catalogue."""
        settings = settings or AppSettings()
        analyzer = PosAnalyzer.create(settings.tokenizer, settings.nlp_service)
        engine = create_engine(settings.matching.engine, catalogue, settings, analyzer)
        classifier = SmartClassifier(catalogue, engine, analyzer, settings.classification)
        translation = TranslationService(translator) if translator is not None else None

        ai_classifier = None
        if settings.pipeline.use_ai_classification:
            if translation is not None and translation.supports_completion:
                ai_classifier = AIClassifier(translation, catalogue)
            else:
                logger.warning("AI classification enabled but the translator cannot complete prompts")

        return cls(
            catalogue,
            analyzer,
            engine,
            classifier,
            translation_service=translation,
            settings=settings,
            ai_classifier=ai_classifier,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def engine(self) -> MatchingEngine:
        return self._engine

    @property
    def classifier(self) -> SmartClassifier:
        return self._classifier

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def is_paused(self) -> bool:
        return not self._resume_event.is_set()

    def pause(self) -> None:
        """Stop before the next file; the current file still completes."""
        if not self.is_paused:
            logger.info("Processing paused")
        self._resume_event.clear()

    def resume(self) -> None:
        if self.is_paused:
            logger.info("Processing resumed")
        self._resume_event.set()

    async def cleanup(self) -> None:
        await self._analyzer.cleanup()
        if self._translation is not None:
            await self._translation.cleanup()

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    async def process_files(
        self,
        files: Sequence[FileRecord],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """
        处理文件列表

        Args:
            files: Records to process, in order (updated in place)
            progress_callback: Called after every file with (current, total, record)

        Raises:
            ProcessingError: A batch is already running on this processor
        """
        if self._is_processing:
            raise ProcessingError("File processing is already running")

        self._is_processing = True
        result = BatchResult(total_files=len(files), started_at=datetime.now())
        logger.info(f"Processing {len(files)} files")

        try:
            hints = await self._ai_hints(files)

            for index, record in enumerate(files, start=1):
                if self.is_paused:
                    logger.info(f"Paused before file {index}/{len(files)}")
                await self._resume_event.wait()

                try:
                    await self.process_file(record, hints.get(record.name))
                    result.successful_files += 1
                except Exception as e:
                    logger.error(f"Failed to process {record.original_name}: {e}", exc_info=True)
                    record.mark_error(str(e) or type(e).__name__)
                    result.failed_files += 1
                    result.errors.append(f"{record.original_name}: {record.error_message}")

                result.records.append(record)
                if progress_callback:
                    progress_callback(index, len(files), record)
        finally:
            self._is_processing = False
            result.completed_at = datetime.now()

        logger.info(
            f"Processed {result.total_files} files: {result.successful_files} ok, "
            f"{result.failed_files} failed ({result.duration_seconds:.2f}s)"
        )
        return result

    async def _ai_hints(self, files: Sequence[FileRecord]) -> Dict[str, Dict[str, Any]]:
        if self._ai_classifier is None or not self._settings.pipeline.use_ai_classification:
            return {}
        return await self._ai_classifier.classify_batch([f.name for f in files])

    # ------------------------------------------------------------------
    # Single file
    # ------------------------------------------------------------------

    async def process_file(
        self,
        record: FileRecord,
        ai_hint: Optional[Mapping[str, Any]] = None,
    ) -> FileRecord:
        """
        Run one record through the whole cycle.

        Errors propagate; process_files() turns them into an error status.
        """
        record.status = FileStatus.PROCESSING
        record.error_message = ""

        parts = extract_number(record.name)
        record.number = parts if parts.has_number else None
        record.name_without_number = parts.text or record.name
        text = record.name_without_number
        record.is_chinese = is_chinese_text(text)

        naming = self._settings.naming
        if record.is_chinese:
            record.translated_name = normalize_chinese_text(text, naming.keep_spaces_in_chinese)
            gloss = await self._reverse_translate(text)
            record.standardized_name = normalize_english_text(gloss) if contains_latin(gloss) else ""
            original_pos = await self._analyze(text)
            translated_text = gloss if gloss != text else None
        else:
            translated = await self._translate(text)
            record.translated_name = translated if translated != text else ""
            record.standardized_name = await self._standardize(text)
            original_pos = await self._analyze(text)
            translated_text = translated if translated != text else None

        translated_pos = (
            await self._analyze(translated_text, WordSource.TRANSLATED) if translated_text else None
        )

        classification = self._classifier.classify_file(
            text,
            ai_hint=ai_hint,
            translated_text=translated_text,
            translated_pos=translated_pos,
            pos_analysis=original_pos,
        )
        if classification is not None:
            record.apply_classification(classification)
        else:
            self._apply_default_category(record)

        record.formatted_name = self._formatter.format(record)
        record.status = FileStatus.SUCCESS
        logger.debug(f"{record.original_name} -> {record.formatted_name} [{record.cat_id or '-'}]")
        return record

    def _apply_default_category(self, record: FileRecord) -> None:
        category = self._settings.pipeline.default_category
        record.cat_id = ""
        record.cat_short = ""
        record.category = category
        record.category_zh = get_category_chinese_name(category)
        record.sub_category = ""
        record.sub_category_zh = ""
        record.match_results = []
        record.current_match_rank = 0

    async def _analyze(self, text: str, source: WordSource = WordSource.ORIGINAL) -> List[WordInfo]:
        return await self._analyzer.analyze_async(text, source)

    async def _translate(self, text: str) -> str:
        """Chinese translation of an English name, the name itself on failure."""
        pipeline = self._settings.pipeline
        if self._translation is None or not pipeline.enable_translation:
            return text
        try:
            return await self._translation.translate(text, pipeline.source_lang, pipeline.target_lang)
        except TranslationError as e:
            logger.warning(f"Translation failed for {text!r}, keeping original: {e}")
            return text

    async def _reverse_translate(self, text: str) -> str:
        if self._translation is None or not self._settings.pipeline.enable_translation:
            return text
        try:
            return await self._translation.reverse_translate(text)
        except TranslationError as e:
            logger.warning(f"Reverse translation failed for {text!r}, keeping original: {e}")
            return text

    async def _standardize(self, text: str) -> str:
        fallback = normalize_english_text(text)
        if self._translation is None or not self._settings.pipeline.enable_standardize:
            return fallback
        try:
            return normalize_english_text(await self._translation.standardize(text)) or fallback
        except TranslationError as e:
            logger.warning(f"Standardization failed for {text!r}: {e}")
            return fallback

    # ------------------------------------------------------------------
    # Manual correction
    # ------------------------------------------------------------------

    def apply_alternate_match(self, record: FileRecord, rank: int) -> bool:
        """
        Switch a record to another ranked candidate and re-format its name.

        Returns:
            False when the record has no candidate with that rank.
        """
        match = next((m for m in record.match_results if m.rank == rank), None)
        if match is None:
            logger.warning(f"No match with rank {rank} for {record.original_name}")
            return False

        record.apply_term(match.term)
        record.current_match_rank = rank
        record.formatted_name = self._formatter.format(record)
        logger.info(f"{record.original_name}: switched to {match.cat_id} (rank {rank})")
        return True

    # ------------------------------------------------------------------
    # Rename
    # ------------------------------------------------------------------

    async def execute_rename(self, files: Sequence[FileRecord], host: HostFileAPI) -> List[RenameOutcome]:
        """
        执行重命名

        Only records in success status with a new name are renamed. Every
        name is validated first; names repeated within the batch are
        rejected.
        """
        outcomes: List[RenameOutcome] = []
        taken: List[str] = []

        for record in files:
            new_name = record.formatted_name
            if record.status is not FileStatus.SUCCESS or not new_name:
                outcomes.append(RenameOutcome(record.id, False, "not processed", skipped=True))
                continue
            if new_name == record.original_name:
                outcomes.append(RenameOutcome(record.id, True, "unchanged", new_name, skipped=True))
                continue

            validation = self._validator.validate(new_name, existing_names=taken)
            if not validation.is_valid:
                message = "; ".join(dict.fromkeys(validation.error_messages + validation.warnings))
                logger.warning(f"Invalid name for {record.original_name}: {message}")
                outcomes.append(RenameOutcome(record.id, False, message, new_name))
                continue

            try:
                await host.rename(record.id, new_name)
            except RenameError as e:
                logger.error(f"Rename failed for {record.original_name}: {e.message}")
                outcomes.append(RenameOutcome(record.id, False, e.message, new_name))
                continue

            taken.append(new_name)
            outcomes.append(RenameOutcome(record.id, True, "renamed", new_name))

        renamed = sum(1 for o in outcomes if o.success and not o.skipped)
        logger.info(f"Renamed {renamed}/{len(files)} files")
        return outcomes
