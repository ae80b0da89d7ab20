"""
Login screen.

Modal form returning (phone, password), or None when the user quits.
"""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class LoginScreen(ModalScreen[tuple[str, str] | None]):
    """Phone + password prompt shown whenever the session is missing."""

    DEFAULT_CSS = """
    LoginScreen {
        align: center middle;
    }

    LoginScreen > Vertical {
        width: 50;
        height: auto;
        padding: 1 2;
        background: #0a0a0a;
        border: solid #44ffaa;
    }

    LoginScreen Horizontal {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, message: str = "", **kwargs):
        super().__init__(**kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("[bold]🔐 LOGIN[/bold]")
            if self.message:
                yield Static(f"[#ff7777]{self.message}[/#ff7777]", id="login-message")
            yield Input(placeholder="Phone (6XXXXXXXX)", id="phone")
            yield Input(placeholder="Password", password=True, id="password")
            with Horizontal():
                yield Button("Login", variant="primary", id="login")
                yield Button("Quit", id="cancel")

    def _submit(self) -> None:
        phone = self.query_one("#phone", Input).value.strip()
        password = self.query_one("#password", Input).value
        if not phone or not password:
            self.notify("Phone and password are required", severity="warning")
            return
        self.dismiss((phone, password))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()
