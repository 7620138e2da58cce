"""Add/edit menu item modal screen."""

from __future__ import annotations

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Static

from kadai.models import MenuForm, MenuItem
from kadai.seller import SellerDashboard


class MenuFormModal(ModalScreen[bool]):
    """Create a menu item, or edit ``item`` when one is given."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    CSS = """
    MenuFormModal {
        align: center middle;
        background: $background 60%;
    }

    #menu-form-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #menu-form-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #menu-form-actions {
        height: auto;
        margin-top: 1;
    }

    #menu-form-actions Button {
        margin-right: 2;
    }
    """

    def __init__(self, dashboard: SellerDashboard, item: MenuItem | None = None) -> None:
        super().__init__()
        self.dashboard = dashboard
        self.item = item
        self.initial = MenuForm.from_item(item) if item is not None else MenuForm()

    def compose(self) -> ComposeResult:
        title = "Edit Menu Item" if self.item is not None else "Add Menu Item"
        with VerticalScroll(id="menu-form-dialog"):
            yield Static(title, id="menu-form-title")
            yield Input(self.initial.name, placeholder="Name *", id="name")
            yield Input(self.initial.description, placeholder="Description", id="description")
            yield Input(self.initial.price, placeholder="Price *", id="price")
            yield Input(self.initial.category, placeholder="Category *", id="category")
            yield Input(self.initial.image_url, placeholder="Image URL (optional)", id="image-url")
            yield Input(placeholder="Image file path (optional, uploads the file)", id="image-path")
            yield Checkbox("Available", self.initial.available, id="available")
            with Horizontal(id="menu-form-actions"):
                yield Button("Update" if self.item is not None else "Add", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#name", Input).focus()

    @on(Button.Pressed, "#cancel")
    def action_cancel(self) -> None:
        if self.dashboard.saving:
            return
        self.dismiss(False)

    @on(Button.Pressed, "#save")
    @on(Input.Submitted)
    def submit(self) -> None:
        self._save()

    def _form(self) -> MenuForm:
        return MenuForm(
            name=self.query_one("#name", Input).value,
            description=self.query_one("#description", Input).value,
            price=self.query_one("#price", Input).value,
            category=self.query_one("#category", Input).value,
            available=self.query_one("#available", Checkbox).value,
            image_url=self.query_one("#image-url", Input).value,
            image_path=self.query_one("#image-path", Input).value,
        )

    @work(exclusive=True)
    async def _save(self) -> None:
        button = self.query_one("#save", Button)
        button.disabled = True
        editing_id = self.item.id if self.item is not None else None
        saved = await self.dashboard.save_menu_item(self._form(), editing_id=editing_id)
        if saved:
            self.dismiss(True)
            return
        button.disabled = False
