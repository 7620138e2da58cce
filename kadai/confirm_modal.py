"""Yes/no confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ConfirmModal(ModalScreen[bool]):
    """Ask before a destructive action; dismisses with the answer."""

    CSS = """
    ConfirmModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 56;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirm-help {
        color: #dddddd;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static(self.message, id="confirm-title")
            yield Static("y / Enter confirm. n / Esc / q cancel.", id="confirm-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"y", "enter"}:
            self.dismiss(True)
            event.stop()
            return

        if event.key in {"n", "escape", "q", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
