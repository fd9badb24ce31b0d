"""Agno-backed responder that reads the document and answers questions.

Architecture:

1. **Knowledge per upload** - Extracted text is added to a LanceDB
   knowledge base tagged with the upload id, and answers search only
   within that upload. Same-named files from different sessions never
   mix, and a released upload has its chunks removed.

2. **History per generation** - Agno keeps conversation history in SQLite
   keyed by session id. We key it by ``<session>-<generation>`` so a reset
   starts a clean conversation even though the session object is reused.

3. **Errors propagate** - Unlike a chat endpoint, the responder does not
   turn failures into text. The response pipeline converts raised errors
   into failure completions, which the session renders as apologies.
"""

import asyncio
import logging
from pathlib import Path

from agno.agent import Agent
from agno.db.sqlite import SqliteDb
from agno.knowledge.knowledge import Knowledge
from agno.models.openai import OpenAIChat
from agno.vectordb.lancedb import LanceDb

from edumate.agent.config import StudyAgentConfig
from edumate.models.session import AnswerContext, Document, ResponderResult
from edumate.parsing.document_parser import extract_text

logger = logging.getLogger(__name__)

_INSTRUCTIONS = [
    "You are a study companion helping a student understand one uploaded document.",
    "Search the knowledge base for the passages relevant to each question.",
    "Answer from the document's content and say so when it does not cover the question.",
    "Answer in the language the student writes in.",
    "Be concise yet thorough.",
]


class StudyAgentResponder:
    """Responder wrapping an Agno agent with document knowledge.

    Args:
        data_dir: Directory for the SQLite history and LanceDB tables.
        config: Optional model configuration; loaded from environment if omitted.
    """

    def __init__(self, data_dir: Path, config: StudyAgentConfig | None = None) -> None:
        self._config = config or StudyAgentConfig()
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._storage = SqliteDb(
            db_file=str(self._data_dir / "sessions.db"),
            session_table="study_sessions",
        )
        self._knowledge = Knowledge(
            vector_db=LanceDb(
                uri=str(self._data_dir / "knowledge"),
                table_name="documents",
            )
        )
        self._agent = self._create_agent()
        # Upload ids currently being ingested, and those released meanwhile
        self._ingesting: set[str] = set()
        self._released: set[str] = set()

    def _create_agent(self) -> Agent:
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            db=self._storage,
            knowledge=self._knowledge,
            description="A patient study companion answering questions about one document.",
            instructions=_INSTRUCTIONS,
            add_history_to_context=True,
            num_history_messages=self._config.history_messages,
            search_knowledge=True,
            markdown=True,
        )

    async def analyze(self, document: Document) -> ResponderResult:
        """Extract the document's text and add it to the knowledge base.

        Raises:
            DocumentParseError: If the document cannot be extracted.
        """
        self._ingesting.add(document.id)
        try:
            return await self._ingest(document)
        finally:
            self._ingesting.discard(document.id)
            # Released while being ingested: drop whatever was added
            if document.id in self._released:
                self._released.discard(document.id)
                self._remove(document)

    async def _ingest(self, document: Document) -> ResponderResult:
        # pypdf is synchronous; keep the event loop responsive
        extracted = await asyncio.to_thread(extract_text, document)
        if not extracted.text.strip():
            return ResponderResult(error=f"No extractable text in {document.name}")

        await self._knowledge.add_content_async(
            name=document.name,
            text_content=extracted.text,
            metadata={**extracted.metadata, "document": document.name, "document_id": document.id},
        )
        logger.info(
            f"Added {document.name} to knowledge base "
            f"({extracted.pages} pages, {len(extracted.text)} characters)"
        )
        return ResponderResult(text=f"{extracted.pages} pages, {len(extracted.text)} characters")

    async def answer(self, text: str, context: AnswerContext) -> ResponderResult:
        knowledge_filters = {"document_id": context.document.id} if context.document else None
        response = await self._agent.arun(
            text,
            session_id=f"{context.session_id}-{context.generation}",
            knowledge_filters=knowledge_filters,
        )
        return ResponderResult(text=response.content or "")

    def release(self, document: Document) -> None:
        """Remove the document's chunks from the knowledge base."""
        if document.id in self._ingesting:
            self._released.add(document.id)
            return
        self._remove(document)

    def _remove(self, document: Document) -> None:
        try:
            self._knowledge.remove_vectors_by_metadata({"document_id": document.id})
        except Exception as e:
            logger.warning(f"Could not remove {document.name} from knowledge base: {e}")
        else:
            logger.info(f"Removed {document.name} from knowledge base")
