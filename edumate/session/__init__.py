"""Session core: state machine, message log and session registry.

Responsibilities:
    - Mode transitions between awaiting, processing and conversing
    - Append-only message log with monotonic sequence numbers
    - Sole access point to the response pipeline
    - Observer notifications for presentation adapters
"""

from edumate.session.chat_session import ChatSession
from edumate.session.manager import SessionManager, build_responder, get_session_manager
from edumate.session.message_log import MessageLog, MessageView

__all__ = [
    "ChatSession",
    "MessageLog",
    "MessageView",
    "SessionManager",
    "build_responder",
    "get_session_manager",
]
