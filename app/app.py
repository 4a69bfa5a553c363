"""
UI layer
Purpose: Streamlit-only glue. Renders the navigation sidebar and the chat
transcript, forwards clicks and typed messages to the controller, and never
decides anything itself. The controller runs on a background event loop
(core.runtime.LoopRunner); this script only hands it commands and reads
snapshots.
"""

import threading

import streamlit as st

from core.config import load_settings
from core.controller import ConversationSessionController
from core.events import NavigationEvents
from core.formatting import format_relative, format_timestamp
from core.logging_setup import configure_logging
from core.models import SessionSnapshot
from core.navigation import QUICK_QUESTIONS, RECENT_CHATS, find_chat
from core.prompts import ASSISTANT_NAME, WELCOME_BODY, WELCOME_TITLE
from core.runtime import LoopRunner
from core.services.factory import build_provider


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title=ASSISTANT_NAME,
    page_icon="💬",
    layout="centered",
    initial_sidebar_state="expanded",
)

# ---------------------------
# UI constants
# ---------------------------
INITIAL_CHAT_ID = "main-chat"
POLL_SECONDS = 0.5

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("events", None)
st_session.setdefault("controller", None)
st_session.setdefault("settled", None)
st_session.setdefault("provider_name", "")


def init_session():
    """Build event bus and controller once per browser session, on the
    process-wide loop."""
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        provider = build_provider(settings)
    except (ValueError, RuntimeError) as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    runner = get_runner()
    events = NavigationEvents()
    settled = threading.Event()
    settled.set()

    def on_change(snap: SessionSnapshot) -> None:
        if snap.pending:
            settled.clear()
        else:
            settled.set()

    def build():
        controller = ConversationSessionController(
            provider, events=events, reply_timeout=settings.reply_timeout
        )
        controller.subscribe(on_change)
        events.select_session(INITIAL_CHAT_ID)
        return controller

    st_session.controller = runner.call(build)
    st_session.events = events
    st_session.settled = settled
    st_session.provider_name = settings.provider


# ---------------------------
# Helpers
# ---------------------------
@st.cache_resource
def get_runner() -> LoopRunner:
    """One event loop thread shared by every browser session."""
    return LoopRunner()


def get_controller() -> ConversationSessionController:
    return st_session.controller


def current_snapshot() -> SessionSnapshot:
    """Snapshot read on the loop thread, never directly from the script."""
    return get_runner().call(get_controller().snapshot)


def select_chat(chat_id: str):
    get_runner().call(st_session.events.select_session, chat_id)


def new_chat():
    get_runner().call(st_session.events.new_chat)


def ask_quick_question(question: str):
    get_runner().call(st_session.events.ask_quick_question, question)


def commit_message(text: str):
    """Two-way bind the typed text into the draft, then commit it."""
    controller = get_controller()

    def _commit():
        controller.draft_input = text
        controller.commit()

    get_runner().call(_commit)


def render_welcome():
    st.markdown(f"## {WELCOME_TITLE}")
    st.caption(WELCOME_BODY)


def render_transcript(snap: SessionSnapshot):
    for msg in snap.transcript:
        with st.chat_message(msg.origin.value):
            st.markdown(msg.content)
            st.caption(format_timestamp(msg.created_at))
    if snap.pending:
        with st.chat_message("assistant"):
            st.markdown("_Thinking..._")


if st_session.controller is None:
    init_session()

snap = current_snapshot()

# ---------------------------
# SIDEBAR: navigation
# ---------------------------
with st.sidebar:
    st.markdown(f"# {ASSISTANT_NAME}")
    if st.button("New Chat", type="primary", use_container_width=True):
        new_chat()
        st.rerun()

    st.divider()
    st.markdown("## Recent Conversations")
    for chat in RECENT_CHATS:
        active = snap.session_id == chat.id
        if st.button(
            f"{chat.title} · {format_relative(chat.last_active)}",
            key=f"chat_{chat.id}",
            type="primary" if active else "secondary",
            use_container_width=True,
        ):
            select_chat(chat.id)
            st.rerun()

    st.divider()
    st.markdown("## Quick Questions")
    st.caption("Starts a new chat with the issue already described.")
    for i, question in enumerate(QUICK_QUESTIONS):
        if st.button(question, key=f"quick_{i}", use_container_width=True):
            ask_quick_question(question)
            st.rerun()

    st.divider()
    st.caption(f"Reply backend: **{st_session.provider_name}**")

# ---------------------------
# Header
# ---------------------------
st.title(ASSISTANT_NAME)
chat = find_chat(snap.session_id)
if chat:
    st.caption(f"Conversation: **{chat.title}**")

# ---------------------------
# Chat area
# ---------------------------
if snap.is_empty and not snap.pending:
    render_welcome()
else:
    render_transcript(snap)

raw = st.chat_input(f"Message {ASSISTANT_NAME}...", disabled=snap.pending)
if raw is not None:
    commit_message(raw)
    st.rerun()

if snap.pending:
    st_session.settled.wait(POLL_SECONDS)
    st.rerun()
