"""FastAPI endpoints for EduMate sessions.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Start a session
    - GET/DELETE /sessions/{id}: Inspect or discard a session
    - POST /sessions/{id}/document: Submit a document for processing
    - POST /sessions/{id}/messages: Ask a question
    - POST /sessions/{id}/reset: Start over with a new document
    - GET/PUT /language: Interface language and static labels
"""

from edumate.api.app import app, create_app

__all__ = ["app", "create_app"]
