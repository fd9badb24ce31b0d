"""Agno agent responder for real document question answering.

Responsibilities:
    - Agent initialization with OpenAI-compatible models
    - Knowledge base ingestion of extracted document text
    - Conversation history per session generation

Optional: only imported when EDUMATE_RESPONDER=agent.
"""

from edumate.agent.config import StudyAgentConfig
from edumate.agent.study_agent import StudyAgentResponder

__all__ = ["StudyAgentConfig", "StudyAgentResponder"]
