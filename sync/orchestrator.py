"""
Batch translation orchestrator.

Groups changed leaves by top-level section, cuts them into bounded batches
and sends the batches to the translation collaborator one after another.
Rate-limit failures are retried with exponential backoff; configuration
failures abort the whole run; everything else fails only the batch at hand.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional

from core.constants import BATCH_KEY_PREFIX, DEFAULT_SYNC_PARAMS
from core.models import LeafEntry
from llm.errors import LLMError, classify_exception
from translation.base import BaseTranslator

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class BatchState(Enum):
    """Lifecycle of a batch."""
    PENDING = 'pending'
    SENDING = 'sending'
    SUCCESS = 'success'
    RETRYABLE_FAILURE = 'retryable_failure'
    TERMINAL_FAILURE = 'terminal_failure'


@dataclass
class Batch:
    """Changed leaves of one section submitted together."""
    section: str
    index: int
    entries: List[LeafEntry]

    def source_texts(self) -> Dict[str, str]:
        """Opaque batch-local keys -> source text."""
        return {
            f"{BATCH_KEY_PREFIX}{i}": entry.value
            for i, entry in enumerate(self.entries)
        }


@dataclass
class BatchOutcome:
    """Result of sending one batch, after retries."""
    batch: Batch
    state: BatchState = BatchState.PENDING
    translations: Dict[LeafEntry, str] = field(default_factory=dict)
    missing: List[LeafEntry] = field(default_factory=list)
    error: Optional[LLMError] = None
    attempts: int = 0
    waits: List[float] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is BatchState.SUCCESS


class BatchTranslationOrchestrator:
    """Sequential, rate-limit aware batch translation."""

    def __init__(
        self,
        translator: BaseTranslator,
        batch_size: int = DEFAULT_SYNC_PARAMS['batch_size'],
        batch_delay: float = DEFAULT_SYNC_PARAMS['batch_delay'],
        max_retries: int = DEFAULT_SYNC_PARAMS['max_retries'],
        backoff_base: float = DEFAULT_SYNC_PARAMS['backoff_base'],
        backoff_max: Optional[float] = DEFAULT_SYNC_PARAMS['backoff_max'],
        max_batch_tokens: int = DEFAULT_SYNC_PARAMS['max_batch_tokens'],
        sleep: Optional[SleepFunc] = None
    ):
        """
        Initialize orchestrator.

        Args:
            translator: Translation collaborator
            batch_size: Maximum leaves per batch
            batch_delay: Seconds to wait before every batch after the first
            max_retries: Retries per batch on rate-limit failures
            backoff_base: Wait before the first retry, doubled on each retry
            backoff_max: Upper bound for a single backoff wait (None = unbounded)
            max_batch_tokens: Token budget per batch (0 = no budget)
            sleep: Awaitable sleep, asyncio.sleep by default
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        self.translator = translator
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max
        self.max_batch_tokens = max_batch_tokens
        self.sleep = sleep or asyncio.sleep

    @classmethod
    def from_settings(cls, translator: BaseTranslator, settings, **kwargs) -> 'BatchTranslationOrchestrator':
        """Build an orchestrator from Settings.get_sync_config()."""
        config = settings.get_sync_config()
        config.update(kwargs)
        return cls(translator, **config)

    def backoff_delay(self, retry: int) -> float:
        """Wait before the given retry (1-based): base, 2*base, 4*base, ..."""
        delay = self.backoff_base * (2 ** (retry - 1))
        if self.backoff_max is not None:
            delay = min(delay, self.backoff_max)
        return delay

    # ─── Planning ──────────────────────────────────────────────────

    def group_by_section(self, entries: List[LeafEntry]) -> Dict[str, List[LeafEntry]]:
        """Group leaves by first path segment, keeping first-seen order."""
        groups: Dict[str, List[LeafEntry]] = {}
        for entry in entries:
            groups.setdefault(entry.section, []).append(entry)
        return groups

    def _split(self, entries: List[LeafEntry]) -> List[List[LeafEntry]]:
        chunks = []
        current: List[LeafEntry] = []
        current_tokens = 0
        for entry in entries:
            tokens = self.translator.count_tokens(entry.value) if self.max_batch_tokens else 0
            over_size = len(current) >= self.batch_size
            over_budget = (
                self.max_batch_tokens > 0
                and current
                and current_tokens + tokens > self.max_batch_tokens
            )
            if over_size or over_budget:
                chunks.append(current)
                current, current_tokens = [], 0
            current.append(entry)
            current_tokens += tokens
        if current:
            chunks.append(current)
        return chunks

    def plan_batches(self, entries: List[LeafEntry]) -> List[Batch]:
        """
        Cut changed leaves into section-coherent batches.

        Args:
            entries: Changed translatable leaves

        Returns:
            Batches in submission order
        """
        batches = []
        for section, section_entries in self.group_by_section(entries).items():
            for chunk in self._split(section_entries):
                batches.append(Batch(section=section, index=len(batches), entries=chunk))
        return batches

    # ─── Execution ─────────────────────────────────────────────────

    async def translate_batch(
        self,
        batch: Batch,
        target_language: str,
        rule_set: str
    ) -> BatchOutcome:
        """
        Send one batch, retrying rate-limit failures.

        Returns:
            BatchOutcome in SUCCESS or TERMINAL_FAILURE state

        Raises:
            LLMError: Fatal (configuration) failures, unchanged
        """
        outcome = BatchOutcome(batch=batch)
        source_texts = batch.source_texts()
        keyed_entries = dict(zip(source_texts, batch.entries))

        while True:
            outcome.state = BatchState.SENDING
            outcome.attempts += 1
            try:
                response = await self.translator.translate(source_texts, target_language, rule_set)
            except Exception as e:
                error = classify_exception(e)
                if error.fatal:
                    if error is e:
                        raise
                    raise error from e
                outcome.error = error
                if error.retryable and outcome.attempts <= self.max_retries:
                    outcome.state = BatchState.RETRYABLE_FAILURE
                    delay = self.backoff_delay(outcome.attempts)
                    logger.info(
                        "Rate limited on section '%s' batch %d, retry %d/%d in %.1fs",
                        batch.section, batch.index, outcome.attempts, self.max_retries, delay
                    )
                    outcome.waits.append(delay)
                    await self.sleep(delay)
                    continue
                outcome.state = BatchState.TERMINAL_FAILURE
                logger.warning(
                    "Batch %d for section '%s' failed after %d attempt(s) (%d fields): %s",
                    batch.index, batch.section, outcome.attempts, len(batch.entries), error
                )
                return outcome

            for key, entry in keyed_entries.items():
                translated = response.get(key)
                if isinstance(translated, str) and translated.strip():
                    outcome.translations[entry] = translated
                else:
                    outcome.missing.append(entry)
            outcome.error = None
            outcome.state = BatchState.SUCCESS
            logger.debug(
                "Batch %d for section '%s': %d translated, %d missing",
                batch.index, batch.section, len(outcome.translations), len(outcome.missing)
            )
            return outcome

    async def run(
        self,
        entries: List[LeafEntry],
        target_language: str,
        rule_set: str
    ) -> AsyncIterator[BatchOutcome]:
        """
        Translate all batches sequentially.

        Yields one outcome per batch as soon as it is final, so callers can
        reconcile and persist progressively and stop between batches.
        """
        batches = self.plan_batches(entries)
        logger.info("Translating %d fields in %d batch(es)", len(entries), len(batches))

        for batch in batches:
            if batch.index > 0 and self.batch_delay > 0:
                await self.sleep(self.batch_delay)
            logger.info(
                "Translating section '%s' - %d fields (batch %d/%d)",
                batch.section, len(batch.entries), batch.index + 1, len(batches)
            )
            yield await self.translate_batch(batch, target_language, rule_set)
