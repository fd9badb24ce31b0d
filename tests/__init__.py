"""Test package for EduMate.

Structure:
    - unit/: Session core, pipeline, localization, parsing and agent tests
    - integration/: HTTP workflows through the FastAPI app

Uses pytest-asyncio in auto mode and pytest-check for soft assertions.
"""
