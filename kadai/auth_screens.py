"""Loading, login and registration screens."""

from __future__ import annotations

from typing import Callable

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Static

from kadai.constant import MIN_PASSWORD, MIN_USERNAME, SHOP_NAME
from kadai.guard import ROUTE_LOGIN, ROUTE_REGISTER, home_route
from kadai.session import SessionStore
from kadai.validation import validate_account

FORM_CSS = """
.auth-card {
    width: 56;
    height: auto;
    border: round $secondary;
    background: $panel;
    padding: 1 2;
}

.auth-title {
    text-style: bold;
    margin-bottom: 1;
}

.auth-help {
    margin-top: 1;
    color: $text-muted;
}

Input {
    margin-bottom: 1;
}
"""


class LoadingScreen(Screen):
    """Neutral placeholder while the session resolves."""

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("Loading...", id="loading")


class LoginScreen(Screen):
    CSS = FORM_CSS + """
    LoginScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "go_register", "Register"),
        ("ctrl+q", "app.quit", "Quit"),
    ]

    def __init__(self, session: SessionStore, navigate: Callable[[str], None]) -> None:
        super().__init__()
        self.session = session
        self.navigate = navigate

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(classes="auth-card"):
            yield Static(f"{SHOP_NAME} - Login", classes="auth-title")
            yield Input(placeholder="Username", id="username")
            yield Input(placeholder="Password", password=True, id="password")
            yield Button("Login", id="login", variant="primary")
            yield Static("Ctrl+R to create an account", classes="auth-help")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#username", Input).focus()

    @on(Button.Pressed, "#login")
    @on(Input.Submitted)
    def submit(self) -> None:
        self._login()

    def action_go_register(self) -> None:
        self.navigate(ROUTE_REGISTER)

    @work(exclusive=True)
    async def _login(self) -> None:
        username = self.query_one("#username", Input).value.strip()
        password = self.query_one("#password", Input).value
        if not username or not password:
            self.app.notify("Username and password are required", severity="error")
            return

        button = self.query_one("#login", Button)
        button.disabled = True
        result = await self.session.login(username, password)
        if not result.success:
            button.disabled = False
            self.app.notify(result.error or "Login failed. Check your credentials.", severity="error")
            return

        self.app.notify("Login successful!")
        self.navigate(home_route(self.session))


class RegisterScreen(Screen):
    CSS = FORM_CSS + """
    RegisterScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+l", "go_login", "Back to login"),
        ("ctrl+q", "app.quit", "Quit"),
    ]

    def __init__(self, session: SessionStore, navigate: Callable[[str], None]) -> None:
        super().__init__()
        self.session = session
        self.navigate = navigate

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(classes="auth-card"):
            yield Static(f"{SHOP_NAME} - Register", classes="auth-title")
            yield Input(placeholder=f"Username (min {MIN_USERNAME} characters)", id="username")
            yield Input(placeholder="Email", id="email")
            yield Input(placeholder=f"Password (min {MIN_PASSWORD} characters)", password=True, id="password")
            yield Button("Register", id="register", variant="primary")
            yield Static("Ctrl+L if you already have an account", classes="auth-help")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#username", Input).focus()

    @on(Button.Pressed, "#register")
    @on(Input.Submitted)
    def submit(self) -> None:
        self._register()

    def action_go_login(self) -> None:
        self.navigate(ROUTE_LOGIN)

    @work(exclusive=True)
    async def _register(self) -> None:
        username = self.query_one("#username", Input).value.strip()
        email = self.query_one("#email", Input).value.strip()
        password = self.query_one("#password", Input).value

        errors = validate_account(username, email, password)
        if errors:
            for message in errors:
                self.app.notify(message, severity="error")
            return

        button = self.query_one("#register", Button)
        button.disabled = True
        result = await self.session.register(username, email, password)
        if not result.success:
            button.disabled = False
            for message in result.errors or (result.error,):
                self.app.notify(message or "Registration failed. Please try again.", severity="error")
            return

        self.app.notify("Registration successful! Please login.")
        self.navigate(ROUTE_LOGIN)
