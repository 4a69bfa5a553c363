"""
Purpose: The only channel between the navigation sidebar and the controller.

Two channels:
- session: a session id chosen by the user (existing chat or "New Chat").
- quick question: a raw issue description picked from the catalog.

The controller subscribes once at construction; the sidebar only emits.
"""

from __future__ import annotations
import logging
from typing import Callable, Optional

from .navigation import new_session_id

logger = logging.getLogger(__name__)

SessionHandler = Callable[[str], None]
QuestionHandler = Callable[[str], None]


class NavigationEvents:
    def __init__(self) -> None:
        self._session_handlers: list[SessionHandler] = []
        self._question_handlers: list[QuestionHandler] = []
        self.current_session_id: Optional[str] = None

    def on_session_selected(self, handler: SessionHandler) -> Callable[[], None]:
        """Subscribe to session switches. Returns an unsubscribe callable."""
        return self._add(self._session_handlers, handler)

    def on_quick_question(self, handler: QuestionHandler) -> Callable[[], None]:
        """Subscribe to quick questions. Returns an unsubscribe callable."""
        return self._add(self._question_handlers, handler)

    def select_session(self, session_id: str) -> None:
        """Emit a session switch to every subscriber, in subscription order."""
        logger.info("Session selected: %s", session_id)
        self.current_session_id = session_id
        for handler in list(self._session_handlers):
            handler(session_id)

    def track_session(self, session_id: Optional[str]) -> None:
        """Record the session the controller is actually on, which may be one
        it created itself (quick questions)."""
        self.current_session_id = session_id

    def new_chat(self) -> str:
        """Start a fresh conversation and return its id."""
        session_id = new_session_id(self.current_session_id)
        self.select_session(session_id)
        return session_id

    def ask_quick_question(self, question: str) -> None:
        """Emit a quick question; blank questions are ignored."""
        if not (question or "").strip():
            return
        logger.info("Quick question: %s", question)
        for handler in list(self._question_handlers):
            handler(question)

    @staticmethod
    def _add(handlers: list, handler) -> Callable[[], None]:
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe
