"""
Purpose: The single orchestration point for a conversation. Owns the session
state (session id, transcript, pending flag, draft input) and mediates
send/receive timing against a ResponseProvider.
Prevents the UI from knowing how replies are produced.

Key responsibilities:
- set_session(): switch to a session id, always starting from a clean slate.
- submit(): append the user message, mark pending, schedule the reply.
- submit_quick_question(): new session + wrapped quick-question message.
- Drop replies that arrive after the session they were issued under has
  been replaced.
- Notify subscribed listeners with a SessionSnapshot after every change.

Concurrency: every method runs on one asyncio loop. The pending flag is the
only gate; at most one reply is outstanding per session.

Testing: Pure unit tests with a fake ResponseProvider whose replies are
asyncio futures settled by the test.
"""

from __future__ import annotations
import asyncio
import itertools
import logging
from typing import Callable, Optional

from .models import Message, Origin, SessionSnapshot, SessionState
from .interfaces import FailureSink, ResponseProvider, SessionListener
from .events import NavigationEvents
from .formatting import make_message_id, utc_now
from .navigation import new_session_id
from .prompts import wrap_quick_question

logger = logging.getLogger(__name__)

COMMIT_KEY = "Enter"


class LoggingFailureSink:
    """Default observability sink: provider failures go to the log only."""

    def record_failure(
        self, session_id: Optional[str], text: str, error: BaseException
    ) -> None:
        logger.error(
            "No reply produced for session %s (%s: %s)",
            session_id,
            type(error).__name__,
            error,
        )


class ConversationSessionController:
    def __init__(
        self,
        provider: ResponseProvider,
        *,
        events: Optional[NavigationEvents] = None,
        failure_sink: Optional[FailureSink] = None,
        reply_timeout: Optional[float] = None,
        session_id_factory: Callable[[Optional[str]], str] = new_session_id,
        clock=utc_now,
    ):
        self.provider: ResponseProvider = provider
        self.failure_sink: FailureSink = failure_sink or LoggingFailureSink()
        self.reply_timeout = reply_timeout
        self.state = SessionState()

        self._session_id_factory = session_id_factory
        self._clock = clock
        self._seq = itertools.count(1)
        self._listeners: list[SessionListener] = []
        self._tasks: set[asyncio.Task] = set()

        if events is not None:
            events.on_session_selected(self.set_session)
            events.on_quick_question(self.submit_quick_question)
            self.subscribe(lambda snap: events.track_session(snap.session_id))

    # ---------------------------
    # Render contract
    # ---------------------------
    @property
    def session_id(self) -> Optional[str]:
        return self.state.session_id

    @property
    def transcript(self) -> tuple[Message, ...]:
        return tuple(self.state.transcript)

    @property
    def pending(self) -> bool:
        return self.state.pending

    @property
    def draft_input(self) -> str:
        return self.state.draft_input

    @draft_input.setter
    def draft_input(self, text: str) -> None:
        self.state.draft_input = text
        self._notify()

    def snapshot(self) -> SessionSnapshot:
        """Read-only view of the current session."""
        return SessionSnapshot(
            session_id=self.state.session_id,
            transcript=tuple(self.state.transcript),
            pending=self.state.pending,
            draft_input=self.state.draft_input,
        )

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call `listener` with a snapshot after every change.
        Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---------------------------
    # Commands
    # ---------------------------
    def set_session(self, session_id: Optional[str]) -> None:
        """Switch to `session_id`; transcript and pending are always cleared,
        even when the id is unchanged."""
        logger.info("Switching session %s -> %s", self.state.session_id, session_id)
        self.state.session_id = session_id
        self.state.transcript = []
        self.state.pending = False
        self.state.epoch += 1
        self._notify()

    def submit(self, text: str) -> Optional[asyncio.Task]:
        """
        Append `text` as a user message and schedule the reply.
        No-op (returns None) for blank text or while a reply is pending.
        Returns the scheduled task otherwise; it never raises on provider
        failure.
        """
        if not (text or "").strip():
            return None
        if self.state.pending:
            logger.debug("Submit ignored: reply pending in %s", self.state.session_id)
            return None

        loop = asyncio.get_running_loop()

        self._append(Origin.USER, text)
        self.state.draft_input = ""
        self.state.pending = True
        self._notify()

        logger.debug("Submitted message in session %s", self.state.session_id)
        task = loop.create_task(
            self._await_reply(self.state.epoch, self.state.session_id, text)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def submit_quick_question(self, raw_question: str) -> Optional[asyncio.Task]:
        """Start a new, empty session and submit the wrapped question in it."""
        # Fail before the session switch so state is untouched without a loop.
        asyncio.get_running_loop()
        self.set_session(self._session_id_factory(self.state.session_id))
        return self.submit(wrap_quick_question(raw_question))

    def commit(self) -> Optional[asyncio.Task]:
        """Submit whatever the user has typed so far."""
        return self.submit(self.state.draft_input)

    def handle_key(self, key: str, *, shift: bool = False) -> bool:
        """Enter commits; Shift+Enter is left to the input as a line break.
        Returns True when a commit was triggered."""
        if key != COMMIT_KEY or shift:
            return False
        self.commit()
        return True

    async def wait_settled(self) -> None:
        """Wait until every reply issued so far has settled. Cancels nothing."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ---------------------------
    # Internals
    # ---------------------------
    async def _await_reply(
        self, epoch: int, session_id: Optional[str], text: str
    ) -> None:
        try:
            if self.reply_timeout is None:
                reply = await self.provider.generate_reply(text)
            else:
                reply = await asyncio.wait_for(
                    self.provider.generate_reply(text), self.reply_timeout
                )
        except asyncio.CancelledError:
            if epoch == self.state.epoch:
                self.state.pending = False
                self._notify()
            raise
        except Exception as e:
            if epoch != self.state.epoch:
                logger.debug("Dropped failure from stale session %s", session_id)
                return
            logger.exception("Error generating reply in session %s", session_id)
            self.state.pending = False
            self.failure_sink.record_failure(session_id, text, e)
            self._notify()
            return

        if epoch != self.state.epoch:
            logger.debug("Dropped stale reply for session %s", session_id)
            return

        self._append(Origin.ASSISTANT, reply)
        self.state.pending = False
        self._notify()

    def _append(self, origin: Origin, content: str) -> Message:
        created_at = self._clock()
        msg = Message(
            id=make_message_id(created_at, next(self._seq)),
            content=content,
            origin=origin,
            created_at=created_at,
        )
        self.state.transcript.append(msg)
        return msg

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Session listener %r failed", listener)
