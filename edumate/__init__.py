"""EduMate - a study companion that answers questions about your document.

Combines an asyncio session state machine with FastAPI for HTTP access,
NiceGUI for the chat interface, Agno for document question answering,
and Pydantic for data validation.

Components:
    - session: Session state machine, message log and registry
    - pipeline: Asynchronous, cancellable response generation
    - i18n: String tables, templating and language preference
    - agent: Agno-backed responder with a document knowledge base
    - parsing: Document text extraction
    - api: HTTP endpoints
    - ui: Web interface
    - models: Domain records and request/response schemas
"""

__version__ = "0.1.0"
