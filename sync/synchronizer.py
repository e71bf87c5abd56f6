"""
Incremental bilingual document synchronization.

Keeps the target-language variant of a document in step with the source
variant while only re-translating fields whose source text changed since the
last successful synchronization.
"""
import copy
import logging
from typing import Any, Callable, Optional

from config.settings import Settings, settings as default_settings
from core.classifier import FieldClassifier
from core.document import NodeKind, index_leaves, node_kind
from core.models import SyncContext, SyncResult, SyncStats
from translation.base import BaseTranslator
from translation.rules import get_translation_rules
from .change_set import compute_change_set
from .hash_store import HashStore
from .orchestrator import BatchTranslationOrchestrator
from .reconciler import apply_fallback, overlay_structural, structural_clone, write_back

logger = logging.getLogger(__name__)


class TranslationFailedError(Exception):
    """Every changed field failed to translate."""

    def __init__(self, stats: SyncStats, translated_document: Any = None):
        self.stats = stats
        self.translated_document = translated_document
        super().__init__(
            f"Translation failed for all {stats.changed} changed fields "
            f"({stats.failed} failed)"
        )


class DocumentSynchronizer:
    """
    Synchronizes one direction of a bilingual document pair.

    Usage:
        synchronizer = DocumentSynchronizer(translator, HashStore(db_manager))
        result = await synchronizer.synchronize(source, 'si', existing, 'project-1')
        if result.stats.failed:
            ...
    """

    def __init__(
        self,
        translator: BaseTranslator,
        hash_store: HashStore,
        classifier: Optional[FieldClassifier] = None,
        orchestrator: Optional[BatchTranslationOrchestrator] = None,
        rules_provider: Optional[Callable[[str], str]] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize synchronizer.

        Args:
            translator: Translation collaborator
            hash_store: Persisted field hashes
            classifier: Structural/translatable classifier (default skip-sets)
            orchestrator: Batch orchestrator (built from settings if None)
            rules_provider: target language -> rule set text
            settings: Settings instance (global settings if None)
        """
        self.settings = settings or default_settings
        self.translator = translator
        self.hash_store = hash_store
        self.classifier = classifier or FieldClassifier()
        self.orchestrator = orchestrator or BatchTranslationOrchestrator.from_settings(
            translator, self.settings
        )
        self.rules_provider = rules_provider or (
            lambda language: get_translation_rules(
                language, self.settings.translation_rules_override
            )
        )

    def _seed_target(self, source: Any, existing_target: Optional[Any]) -> Any:
        if existing_target is not None and node_kind(existing_target) is node_kind(source):
            return copy.deepcopy(existing_target)
        if existing_target is not None:
            logger.warning("Existing target document has a different root type, reseeding")
        return structural_clone(source, self.classifier)

    async def synchronize(
        self,
        source_document: Any,
        target_language: str,
        existing_target_document: Optional[Any] = None,
        document_id: str = '',
        source_language: Optional[str] = None
    ) -> SyncResult:
        """
        Bring the target-language document up to date with the source.

        Args:
            source_document: Source-language document tree
            target_language: Language code to translate into
            existing_target_document: Current target variant, if any
            document_id: Identifier keying the stored hashes
            source_language: Source language code; defaults to the other
                member of the configured language pair

        Returns:
            SyncResult with the reconciled target document and statistics

        Raises:
            ValueError: Missing document id or identical languages
            LLMError: Configuration failure of the translation service
            TranslationFailedError: Every changed field failed to translate
        """
        if not document_id:
            raise ValueError("document_id is required")
        if node_kind(source_document) not in (NodeKind.MAP, NodeKind.LIST):
            raise ValueError("source_document must be a dict or a list")
        source_language = source_language or self.settings.source_language_for(target_language)
        if source_language == target_language:
            raise ValueError(f"Source and target language are both '{target_language}'")
        context = SyncContext(document_id, source_language, target_language)

        # 1. Index and classify source fields
        translatable, structural = self.classifier.partition(index_leaves(source_document))
        logger.info(
            "[%s] %s->%s: %d translatable fields, %d structural",
            context.document_id, context.source_lang, context.target_lang,
            len(translatable), len(structural)
        )

        # 2. Seed the target and copy every structural field from source
        target = self._seed_target(source_document, existing_target_document)
        overlay_structural(source_document, target, self.classifier)

        # 3. Diff against the last synchronization
        stored_hashes = self.hash_store.load(
            context.document_id, context.source_lang, context.target_lang
        )
        change_set = compute_change_set(translatable, stored_hashes, target)
        stats = SyncStats(total=len(translatable), changed=len(change_set.changed))
        logger.info(
            "[%s] %d fields changed, %d unchanged (%d stored hashes)",
            context.document_id, stats.changed, len(change_set.unchanged), len(stored_hashes)
        )
        self.hash_store.save(
            context.document_id, context.source_lang, context.target_lang,
            change_set.unchanged
        )

        if not change_set.changed:
            logger.info("[%s] Nothing changed, no translation needed", context.document_id)
            return SyncResult(translated_document=target, stats=stats)

        # 4. Translate changed fields batch by batch
        rule_set = self.rules_provider(context.target_lang)
        async for outcome in self.orchestrator.run(change_set.changed, context.target_lang, rule_set):
            if outcome.succeeded:
                stats.translated += write_back(target, outcome.translations)
                self.hash_store.save(
                    context.document_id, context.source_lang, context.target_lang,
                    list(outcome.translations)
                )
                failed_entries = outcome.missing
            else:
                failed_entries = outcome.batch.entries
            if failed_entries:
                stats.failed += len(failed_entries)
                apply_fallback(target, failed_entries)

        logger.info(
            "[%s] Done: %d/%d translated, %d failed, %d skipped",
            context.document_id, stats.translated, stats.changed, stats.failed,
            len(change_set.unchanged)
        )

        if stats.translated == 0:
            raise TranslationFailedError(stats, target)

        return SyncResult(translated_document=target, stats=stats)
