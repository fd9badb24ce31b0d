"""Unit tests for StudyAgentResponder with the Agno classes mocked."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from edumate.agent.config import StudyAgentConfig
from edumate.models.session import AnswerContext, Document
from edumate.parsing.document_parser import DocumentParseError

MODULE = "edumate.agent.study_agent"


@pytest.fixture
def agno() -> dict[str, MagicMock]:
    """Patch every Agno class the responder constructs."""
    with (
        patch(f"{MODULE}.Agent") as agent_cls,
        patch(f"{MODULE}.OpenAIChat") as model_cls,
        patch(f"{MODULE}.SqliteDb") as db_cls,
        patch(f"{MODULE}.LanceDb") as vector_cls,
        patch(f"{MODULE}.Knowledge") as knowledge_cls,
    ):
        knowledge_cls.return_value.add_content_async = AsyncMock()
        agent_cls.return_value.arun = AsyncMock(return_value=MagicMock(content="An answer"))
        yield {
            "agent": agent_cls,
            "model": model_cls,
            "db": db_cls,
            "vector": vector_cls,
            "knowledge": knowledge_cls,
        }


@pytest.fixture
def config() -> StudyAgentConfig:
    return StudyAgentConfig(api_key="sk-test", model_name="gpt-4o-mini", temperature=0.2)


def _responder(tmp_path: Path, config: StudyAgentConfig):
    from edumate.agent.study_agent import StudyAgentResponder

    return StudyAgentResponder(data_dir=tmp_path, config=config)


class TestInit:
    """Tests for agent construction."""

    def test_model_built_from_config(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """OpenAIChat receives the configured model settings."""
        _responder(tmp_path, config)

        agno["model"].assert_called_once_with(
            id="gpt-4o-mini",
            api_key="sk-test",
            base_url=None,
            temperature=0.2,
            max_tokens=1024,
        )

    def test_agent_uses_history_and_knowledge(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """The agent searches knowledge and keeps conversation history."""
        _responder(tmp_path, config)

        kwargs = agno["agent"].call_args.kwargs
        assert kwargs["search_knowledge"] is True
        assert kwargs["add_history_to_context"] is True
        assert kwargs["num_history_messages"] == 20
        assert kwargs["knowledge"] is agno["knowledge"].return_value

    def test_storage_lives_in_data_dir(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        _responder(tmp_path, config)

        assert agno["db"].call_args.kwargs["db_file"] == str(tmp_path / "sessions.db")
        assert agno["vector"].call_args.kwargs["uri"] == str(tmp_path / "knowledge")


class TestAnalyze:
    """Tests for document ingestion."""

    async def test_adds_text_to_knowledge(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """Extracted text is stored with the document name."""
        responder = _responder(tmp_path, config)

        document = Document(name="notes.md", handle=b"# Mitosis")

        result = await responder.analyze(document)

        assert result.ok
        add_content = agno["knowledge"].return_value.add_content_async
        add_content.assert_awaited_once()
        assert add_content.call_args.kwargs["text_content"] == "# Mitosis"
        assert add_content.call_args.kwargs["metadata"] == {
            "document": "notes.md",
            "document_id": document.id,
        }

    async def test_empty_text_is_an_error(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """A document without text is reported, not ingested."""
        responder = _responder(tmp_path, config)

        result = await responder.analyze(Document(name="blank.txt", handle=b"   "))

        assert result.error is not None
        agno["knowledge"].return_value.add_content_async.assert_not_awaited()

    async def test_parse_errors_propagate(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """Extraction failures are raised for the pipeline to convert."""
        responder = _responder(tmp_path, config)

        with pytest.raises(DocumentParseError):
            await responder.analyze(Document(name="essay.docx", handle=b"PK"))


class TestAnswer:
    """Tests for question answering."""

    async def test_history_keyed_by_generation(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """Each session generation gets its own agent history."""
        responder = _responder(tmp_path, config)
        document = Document(name="notes.md", handle=b"x")
        context = AnswerContext(session_id="abc", generation=3, document=document)

        result = await responder.answer("What is mitosis?", context)

        assert result.text == "An answer"
        agno["agent"].return_value.arun.assert_awaited_once_with(
            "What is mitosis?",
            session_id="abc-3",
            knowledge_filters={"document_id": document.id},
        )

    async def test_same_named_uploads_are_kept_apart(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """Two sessions uploading notes.pdf search only their own upload."""
        responder = _responder(tmp_path, config)
        first = Document(name="notes.pdf", handle=b"cells")
        second = Document(name="notes.pdf", handle=b"planets")

        await responder.answer("q", AnswerContext(session_id="a", generation=0, document=first))
        await responder.answer("q", AnswerContext(session_id="b", generation=0, document=second))

        arun = agno["agent"].return_value.arun
        filters = [call.kwargs["knowledge_filters"] for call in arun.await_args_list]
        assert filters == [{"document_id": first.id}, {"document_id": second.id}]
        assert first.id != second.id


class TestRelease:
    """Tests for removing a document from the knowledge base."""

    def test_release_removes_chunks(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        responder = _responder(tmp_path, config)
        document = Document(name="notes.md", handle=b"x")

        responder.release(document)

        agno["knowledge"].return_value.remove_vectors_by_metadata.assert_called_once_with(
            {"document_id": document.id}
        )

    async def test_release_during_ingestion_removes_after_add(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """A document released mid-analysis is removed once its chunks land."""
        responder = _responder(tmp_path, config)
        document = Document(name="notes.md", handle=b"# Mitosis")
        knowledge = agno["knowledge"].return_value
        knowledge.add_content_async.side_effect = lambda **_: responder.release(document)

        await responder.analyze(document)

        knowledge.remove_vectors_by_metadata.assert_called_once_with({"document_id": document.id})

    def test_release_failure_is_logged(
        self, agno: dict[str, MagicMock], config: StudyAgentConfig, tmp_path: Path
    ) -> None:
        """A store error while removing chunks does not propagate."""
        responder = _responder(tmp_path, config)
        agno["knowledge"].return_value.remove_vectors_by_metadata.side_effect = OSError("locked")

        responder.release(Document(name="notes.md", handle=b"x"))
