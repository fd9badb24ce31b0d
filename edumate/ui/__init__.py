"""NiceGUI interface - thin presentation layer over a ChatSession.

Responsibilities:
    - Upload view while awaiting or processing a document
    - Chat view with typing indicator while an answer is pending
    - Language picker persisted per browser

Contains no session logic; it forwards intents and re-renders on
session notifications.
"""
