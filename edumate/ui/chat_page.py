"""NiceGUI study interface: upload a document, then chat about it.

The page holds a reference to one ChatSession and renders whatever the
session reports; it never keeps its own copy of mode, messages or busy
state. Every label is resolved through the localization provider.
"""

from collections.abc import Callable

from nicegui import Client, app, events, ui

from edumate.i18n.provider import LocalizationProvider
from edumate.models.session import Document, Message, Role, SessionMode
from edumate.parsing.document_parser import ACCEPTED_EXTENSIONS
from edumate.session.chat_session import ChatSession
from edumate.session.manager import get_session_manager

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: radial-gradient(circle at 30% 20%, #ffffff 0%, #d4d4d8 60%, #52525b 100%);
           min-height: 100vh; }

    .glass-card {
        background: rgba(255, 255, 255, 0.75);
        backdrop-filter: blur(12px);
        border-radius: 20px;
        box-shadow: 0 8px 32px rgba(0, 0, 0, 0.12);
    }

    .brand-title { font-size: 3rem; font-weight: 700; letter-spacing: -0.02em; }

    .message-user {
        background: #111827;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #6b7280;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


class UserStoragePreferenceStore:
    """Language preference kept in NiceGUI's per-browser user storage."""

    key = "language"

    def read_preference(self) -> str | None:
        value = app.storage.user.get(self.key)
        return value if isinstance(value, str) else None

    def write_preference(self, tag: str) -> None:
        app.storage.user[self.key] = tag


def render_message(message: Message) -> None:
    is_user = message.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[75%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                if is_user:
                    ui.label(message.content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(message.content).classes("text-sm")
            ui.label(message.created_at.strftime("%I:%M %p")).classes(
                f"text-[10px] text-gray-500 {'self-end' if is_user else 'self-start'}"
            )


def render_typing_indicator(text: str) -> None:
    with ui.row().classes("w-full justify-start"):
        with ui.element("div").classes("message-assistant px-4 py-3"):
            with ui.row().classes("items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label(text).classes("text-sm text-gray-500 italic")


def follow_session(session: ChatSession, client: Client, refresh: Callable[[], None]) -> None:
    """Re-render on every session change until the browser disconnects."""
    unsubscribe = session.subscribe(lambda _: refresh())
    client.on_disconnect(unsubscribe)


@ui.page("/")
def chat_page() -> None:
    """Main study page."""
    ui.add_head_html(CUSTOM_CSS)
    manager = get_session_manager()
    localization = LocalizationProvider(
        UserStoragePreferenceStore(),
        default_language=manager.settings.default_language,
        strict=manager.settings.strict_i18n,
    )
    session: ChatSession = manager.create(localization, register=False)
    t = localization.translate
    input_field: ui.textarea
    # Survives re-renders so a half-typed question is not lost
    draft = {"text": ""}

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        session.select_document(Document(name=e.file.name, handle=content))

    def send_message() -> None:
        if session.submit_text(input_field.value or ""):
            input_field.value = ""

    def render_language_picker() -> None:
        options = {tag: localization.language_name(tag) for tag in localization.supported_languages}
        ui.select(
            options,
            value=localization.language,
            label=t("language_label"),
            on_change=lambda e: session.change_language(e.value),
        ).props("dense outlined").classes("w-36")

    def render_upload_view() -> None:
        processing = session.mode is SessionMode.PROCESSING_DOCUMENT
        with ui.column().classes("w-full items-center gap-2 mb-6"):
            ui.label(t("brand_title")).classes("brand-title")
            ui.label(t("brand_subtitle")).classes("text-lg text-gray-600")

        with ui.column().classes("glass-card w-full max-w-lg mx-auto p-8 items-center gap-4"):
            ui.icon("menu_book").classes("text-6xl text-gray-700")
            ui.label(t("upload_heading")).classes("text-xl font-semibold")
            ui.label(t("upload_description")).classes("text-gray-600 text-center")

            if processing:
                ui.spinner(size="lg")
                ui.label(t("processing_document")).classes("text-sm text-gray-500")
            else:
                ui.upload(
                    label=t("choose_document"),
                    on_upload=handle_upload,
                    auto_upload=True,
                    max_files=1,
                ).props(f'accept="{",".join(ACCEPTED_EXTENSIONS)}" flat bordered').classes("w-full")

    def render_chat_view() -> None:
        nonlocal input_field
        with ui.column().classes("glass-card w-full max-w-3xl mx-auto").style(
            "height: calc(100vh - 6rem)"
        ):
            with ui.row().classes("w-full px-5 py-4 items-center justify-between border-b"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("description").classes("text-2xl text-gray-700")
                    ui.label(session.document.name if session.document else "").classes(
                        "font-medium"
                    )
                ui.button(t("new_document"), icon="add", on_click=session.reset).props(
                    "flat no-caps"
                )

            with (
                ui.scroll_area().classes("flex-grow w-full"),
                ui.column().classes("w-full p-5 gap-4"),
            ):
                for message in session.messages:
                    render_message(message)
                if session.busy:
                    render_typing_indicator(t("thinking"))

            with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
                input_field = (
                    ui.textarea(placeholder=t("input_placeholder"))
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .bind_value(draft, "text")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")
                send_btn.bind_enabled_from(
                    input_field, "value", lambda v: bool(v and v.strip()) and _can_submit()
                )

    def _can_submit() -> bool:
        return session.mode is SessionMode.CONVERSING and not session.busy

    @ui.refreshable
    def content() -> None:
        with ui.row().classes("w-full justify-end px-6 pt-4"):
            render_language_picker()

        with ui.element("div").classes("w-full px-4 md:px-8"):
            # A failed analysis stays in processing mode but is no longer busy:
            # show the apology and the reset button from the chat view.
            awaiting = session.mode is SessionMode.AWAITING_DOCUMENT
            processing = session.mode is SessionMode.PROCESSING_DOCUMENT and session.busy
            if awaiting or processing:
                render_upload_view()
            else:
                render_chat_view()

    content()
    follow_session(session, ui.context.client, content.refresh)
