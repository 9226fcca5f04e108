"""LLM based EntryDecisionMaker implementation."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from summarylog.config.models import SummaryConfig
from summarylog.domain.entities import (
    AppendDecision,
    ConversationDigest,
    CreateDecision,
    SummaryDecision,
    SummaryLogEntry,
    UpdateDecision,
    format_timestamp,
)
from summarylog.domain.services.entry_codec import get_recent_entries
from summarylog.domain.services.protocols import StructuredGenerator
from summarylog.infrastructure.llm.models import DecisionOutput
from summarylog.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

RECENT_ENTRY_LIMIT = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LLMDecisionEngine:
    """Decides how a digest enters the summary log.

    The model is shown the newest entries and the digest transcript and
    either continues the newest entry or starts a new one. Only the newest
    entry (index 0) can ever be updated.

    When generation fails, times out or returns invalid output, a
    deterministic entry describing the window is used instead. That entry
    always creates or appends and never updates, so an existing entry is
    never changed without a model decision behind it.
    """

    def __init__(
        self,
        generator: StructuredGenerator,
        config: SummaryConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            generator: Structured generator used to draft entries.
            config: Summary configuration (generation timeout).
            clock: Source of the entry timestamps.
            debug_llm_messages: If True, log prompts and outputs at INFO level.
        """
        self._generator = generator
        self._config = config or SummaryConfig()
        self._clock = clock
        self._debug_llm_messages = debug_llm_messages
        self._jinja_env = create_jinja_env()
        self._template = self._jinja_env.get_template("decision_prompt.j2")

    async def decide(
        self,
        digest: ConversationDigest,
        existing_body: str | None,
    ) -> SummaryDecision:
        """Produce a decision and a drafted entry for a digest.

        Args:
            digest: Digest to summarize.
            existing_body: Entry log of the existing document, or None when
                the conversation has no summary yet. An empty string means a
                document exists but holds no readable entries.

        Returns:
            CreateDecision when no document exists, otherwise UpdateDecision
            or AppendDecision.
        """
        has_document = existing_body is not None
        recent_entries = (
            get_recent_entries(existing_body, RECENT_ENTRY_LIMIT)
            if existing_body
            else []
        )
        prompt = self.build_prompt(digest, recent_entries)
        now = format_timestamp(self._clock())

        try:
            output = await self._generate(prompt)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning(
                "Summary generation cancelled for %s (%s), using fallback entry",
                digest.conversation_id,
                digest.window_label,
            )
            return self._fallback_decision(digest, has_document, now)
        except Exception as e:
            logger.warning(
                "Summary generation failed for %s (%s), using fallback entry: %s",
                digest.conversation_id,
                digest.window_label,
                e,
            )
            return self._fallback_decision(digest, has_document, now)

        entry = SummaryLogEntry(
            title=output.title,
            content=output.summary,
            created=now,
            updated=now,
        )

        if output.action == "update" and output.index == 0 and recent_entries:
            return UpdateDecision(entry=entry, entry_index=0)
        if output.action == "update":
            logger.info(
                "Ignoring update of entry %s for %s, recording a new entry",
                output.index,
                digest.conversation_id,
            )
        if has_document:
            return AppendDecision(entry=entry)
        return CreateDecision(entry=entry)

    def build_prompt(
        self,
        digest: ConversationDigest,
        recent_entries: Sequence[SummaryLogEntry],
    ) -> str:
        """Render the decision prompt.

        Args:
            digest: Digest to summarize.
            recent_entries: Newest entries, newest first.

        Returns:
            Rendered prompt string.
        """
        return self._template.render(
            window_start=digest.window_start,
            window_end=digest.window_end,
            recent_entries=recent_entries,
            messages=digest.messages,
        )

    async def _generate(self, prompt: str) -> DecisionOutput:
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== Decision Prompt ===\n%s", prompt)

        output = await asyncio.wait_for(
            self._generator.generate(prompt, DecisionOutput),
            timeout=self._config.generation_timeout_seconds,
        )
        if not isinstance(output, DecisionOutput):
            raise TypeError(
                f"Expected DecisionOutput but got {type(output).__name__}"
            )

        log_func("=== Decision Output ===\n%s", output)
        return output

    def _fallback_decision(
        self,
        digest: ConversationDigest,
        has_document: bool,
        now: str,
    ) -> SummaryDecision:
        entry = SummaryLogEntry(
            title=f"Messages {digest.window_label}",
            content=(
                f"{len(digest.messages)} messages exchanged in messages "
                f"{digest.window_label}."
            ),
            created=now,
            updated=now,
        )
        if has_document:
            return AppendDecision(entry=entry)
        return CreateDecision(entry=entry)
