"""String tables for every supported interface language.

Templates use ``{name}`` placeholders. Every key must exist in every
table; ``LocalizationProvider.validate_tables`` enforces this.
"""

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Español",
}

STRING_TABLES: dict[str, dict[str, str]] = {
    "en": {
        # Session messages
        "initial_analysis": (
            'Great! I\'ve analyzed your document "{file}". I\'m ready to help you study '
            "and answer any questions about the content. What would you like to know?"
        ),
        "simulated_answer": (
            "I understand your question about the document. Based on the content "
            "you've uploaded, here's what I can help you with..."
        ),
        "analysis_failed": (
            'Sorry, I couldn\'t process "{file}". Please choose another document.'
        ),
        "answer_failed": "Sorry, I couldn't answer that right now. Please try again.",
        # Static labels
        "brand_title": "EduMate",
        "brand_subtitle": "Your AI Study Companion",
        "upload_heading": "Upload Your Study Material",
        "upload_description": "Upload any document and I'll help you study it effectively",
        "choose_document": "Choose Document",
        "processing_document": "Processing your document...",
        "new_document": "New Document",
        "input_placeholder": "Ask me anything about your document...",
        "send": "Send",
        "language_label": "Language",
        "thinking": "Thinking...",
    },
    "es": {
        "initial_analysis": (
            '¡Genial! He analizado tu documento "{file}". Estoy listo para ayudarte a '
            "estudiar y responder cualquier pregunta sobre el contenido. "
            "¿Qué te gustaría saber?"
        ),
        "simulated_answer": (
            "Entiendo tu pregunta sobre el documento. Según el contenido que has "
            "subido, esto es lo que puedo hacer por ti..."
        ),
        "analysis_failed": (
            'Lo siento, no pude procesar "{file}". Por favor, elige otro documento.'
        ),
        "answer_failed": (
            "Lo siento, no pude responder en este momento. Por favor, inténtalo de nuevo."
        ),
        "brand_title": "EduMate",
        "brand_subtitle": "Tu compañero de estudio con IA",
        "upload_heading": "Sube tu material de estudio",
        "upload_description": "Sube cualquier documento y te ayudaré a estudiarlo de forma eficaz",
        "choose_document": "Elegir documento",
        "processing_document": "Procesando tu documento...",
        "new_document": "Nuevo documento",
        "input_placeholder": "Pregúntame lo que quieras sobre tu documento...",
        "send": "Enviar",
        "language_label": "Idioma",
        "thinking": "Pensando...",
    },
}

# Labels rendered by presentation adapters, independent of the message log.
STATIC_LABEL_KEYS: tuple[str, ...] = (
    "brand_title",
    "brand_subtitle",
    "upload_heading",
    "upload_description",
    "choose_document",
    "processing_document",
    "new_document",
    "input_placeholder",
    "send",
    "language_label",
    "thinking",
)
