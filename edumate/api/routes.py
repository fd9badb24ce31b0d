"""Session and language endpoints.

Each endpoint forwards one intent to the session and returns the
resulting snapshot. Intents the session ignores (blank text, busy,
wrong mode) are not errors: the unchanged snapshot is the answer.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from edumate.models.schemas import ChatRequest, LanguageRequest, LanguageResponse
from edumate.models.session import Document, SessionSnapshot
from edumate.parsing.document_parser import ACCEPTED_EXTENSIONS, MAX_FILE_SIZE, is_accepted
from edumate.session.chat_session import ChatSession
from edumate.session.manager import SessionManager, get_session_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])


def _get_session(session_id: str, manager: SessionManager) -> ChatSession:
    session = manager.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return session


def _validate_filename(filename: str | None) -> str:
    """Validate that the file has an accepted extension.

    Raises:
        HTTPException: 400 if the name is missing or the extension is not accepted.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not is_accepted(filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type. Accepted: {', '.join(ACCEPTED_EXTENSIONS)}",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


def _language_response(manager: SessionManager) -> LanguageResponse:
    localization = manager.localization
    return LanguageResponse(
        language=localization.language,
        supported=list(localization.supported_languages),
        labels=localization.labels(),
    )


@router.post("/sessions", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
async def create_session(
    manager: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Start a new session awaiting a document."""
    return manager.create().snapshot()


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def get_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Return the current state of a session."""
    return _get_session(session_id, manager).snapshot()


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> None:
    """Discard a session and any outstanding work."""
    if not manager.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )


@router.post(
    "/sessions/{session_id}/document",
    response_model=SessionSnapshot,
    status_code=status.HTTP_202_ACCEPTED,
)
async def upload_document(
    session_id: str,
    file: UploadFile,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Submit a document; processing continues in the background.

    Raises:
        400: Missing filename or unsupported file type.
        404: Unknown session.
        413: File exceeds 10MB limit.
    """
    session = _get_session(session_id, manager)
    filename = _validate_filename(file.filename)
    content = await _read_and_validate_size(file)

    if session.select_document(Document(name=filename, handle=content)):
        logger.info(f"Accepted {filename} ({len(content)} bytes) for session {session_id}")
    return session.snapshot()


@router.post(
    "/sessions/{session_id}/messages",
    response_model=SessionSnapshot,
    status_code=status.HTTP_202_ACCEPTED,
)
async def submit_message(
    session_id: str,
    request: ChatRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Submit a question; the answer is appended when it completes."""
    session = _get_session(session_id, manager)
    session.submit_text(request.message)
    return session.snapshot()


@router.post("/sessions/{session_id}/reset", response_model=SessionSnapshot)
async def reset_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionSnapshot:
    """Return the session to awaiting a new document."""
    session = _get_session(session_id, manager)
    session.reset()
    return session.snapshot()


@router.get("/language", response_model=LanguageResponse, tags=["language"])
async def get_language(
    manager: SessionManager = Depends(get_session_manager),
) -> LanguageResponse:
    """Return the active language and its static labels."""
    return _language_response(manager)


@router.put("/language", response_model=LanguageResponse, tags=["language"])
async def set_language(
    request: LanguageRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> LanguageResponse:
    """Change the interface language; unsupported tags leave it unchanged."""
    manager.localization.set_preference(request.language.strip().lower())
    return _language_response(manager)
