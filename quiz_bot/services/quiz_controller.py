"""Command boundary between the presentation layer and the quiz core."""
import asyncio
from dataclasses import dataclass
from typing import Optional, Tuple

from quiz_bot.models import HistoryRecord, ResolvedQuestions, SessionView
from quiz_bot.services.history_ledger import HistoryLedger
from quiz_bot.services.question_source import QuestionSource
from quiz_bot.services.session_engine import QuizSession


@dataclass(frozen=True)
class StartOutcome:
    view: SessionView
    from_fallback: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class AdvanceResult:
    view: SessionView
    was_correct: bool
    record: Optional[HistoryRecord] = None
    saved: bool = True   # False when the record could not reach the store


class QuizController:
    """
    Owns the single quiz session of the process.

    Every command runs under one asyncio.Lock, so a reset can never interleave
    with the history append of a finishing advance().
    """

    def __init__(
        self,
        source: QuestionSource,
        ledger: HistoryLedger,
        session: Optional[QuizSession] = None,
        resolve_timeout: Optional[float] = None,
    ):
        self.source = source
        self.ledger = ledger
        self.session = session or QuizSession()
        self.resolve_timeout = resolve_timeout if resolve_timeout and resolve_timeout > 0 else None
        self._lock = asyncio.Lock()

    @property
    def view(self) -> SessionView:
        return self.session.view

    async def start(self) -> StartOutcome:
        """Resolve a question set and start a new session over it."""
        async with self._lock:
            resolved = await self._resolve()
            self.session.initialize(resolved.questions)
            return StartOutcome(
                view=self.session.view,
                from_fallback=resolved.from_fallback,
                reason=resolved.reason,
            )

    async def select_option(self, index: int) -> SessionView:
        async with self._lock:
            self.session.select_option(index)
            return self.session.view

    async def advance(self) -> AdvanceResult:
        """
        Judge the current question; on the last one, store the session result.

        Raises:
            CommandRejected: from the session, state unchanged
        """
        async with self._lock:
            outcome = self.session.advance()
            saved = True
            if outcome.record is not None:
                await self.ledger.append(outcome.record)
                saved = self.ledger.in_sync
            return AdvanceResult(
                view=self.session.view,
                was_correct=outcome.was_correct,
                record=outcome.record,
                saved=saved,
            )

    async def reset(self) -> SessionView:
        async with self._lock:
            self.session.reset()
            return self.session.view

    def view_history(self) -> Tuple[HistoryRecord, ...]:
        return self.ledger.records

    async def clear_history(self) -> bool:
        """Clear the history. Returns False if the stored copy could not be removed."""
        async with self._lock:
            await self.ledger.clear()
            return self.ledger.in_sync

    async def _resolve(self) -> ResolvedQuestions:
        if self.resolve_timeout is None:
            return await self.source.resolve()
        try:
            return await asyncio.wait_for(self.source.resolve(), timeout=self.resolve_timeout)
        except asyncio.TimeoutError:
            return self.source.fallback(f"no answer within {self.resolve_timeout:g}s")
