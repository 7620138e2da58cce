"""New seller account modal screen."""

from __future__ import annotations

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from kadai.constant import MIN_PASSWORD, MIN_USERNAME
from kadai.seller import SellerDashboard


class SellerAccountModal(ModalScreen[bool]):
    BINDINGS = [
        ("escape", "close", "Close"),
    ]

    CSS = """
    SellerAccountModal {
        align: center middle;
        background: $background 60%;
    }

    #seller-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #seller-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #seller-actions {
        height: auto;
    }

    #seller-actions Button {
        margin-right: 2;
    }
    """

    def __init__(self, dashboard: SellerDashboard) -> None:
        super().__init__()
        self.dashboard = dashboard
        self.creating = False

    def compose(self) -> ComposeResult:
        with Container(id="seller-dialog"):
            yield Static("Add New Seller", id="seller-title")
            yield Input(placeholder=f"New seller username * (min {MIN_USERNAME})", id="username")
            yield Input(placeholder="New seller email *", id="email")
            yield Input(placeholder=f"Temporary password * (min {MIN_PASSWORD})", password=True, id="password")
            with Horizontal(id="seller-actions"):
                yield Button("Create Seller", id="create", variant="primary")
                yield Button("Close", id="close")

    def on_mount(self) -> None:
        self.query_one("#username", Input).focus()

    @on(Button.Pressed, "#close")
    def action_close(self) -> None:
        if self.creating:
            return
        self.dismiss(False)

    @on(Button.Pressed, "#create")
    @on(Input.Submitted)
    def submit(self) -> None:
        self._create()

    @work(exclusive=True)
    async def _create(self) -> None:
        button = self.query_one("#create", Button)
        button.disabled = True
        button.label = "Creating..."
        self.creating = True
        try:
            created = await self.dashboard.create_seller(
                self.query_one("#username", Input).value,
                self.query_one("#email", Input).value,
                self.query_one("#password", Input).value,
            )
        finally:
            self.creating = False

        if created:
            self.dismiss(True)
            return
        button.disabled = False
        button.label = "Create Seller"
