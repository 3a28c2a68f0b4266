"""Minimal Textual front end for FileSeal.

Start here with `python -m fileseal.frontend.cli.app` or `fileseal tui`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Input, Label, Static

from fileseal.core import files
from fileseal.core.exceptions import FileSealError
from fileseal.core.sealer import Phase, open_container, seal
from fileseal.frontend.cli.context import CliContext, build_context


def _human_size(num: int) -> str:
    # Simple human-readable bytes formatter.
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if num < 1024:
            return f"{num:.1f} {unit}" if unit != "B" else f"{num} B"
        num /= 1024
    return f"{num:.1f} PB"


class FileSealApp(App):
    """One form for both directions: pick a path, type a password, lock or unlock."""

    TITLE = "FileSeal"

    CSS = """
    #form { padding: 1 2; border: heavy $surface; }
    #buttons { height: auto; }
    .title { padding: 1 1; text-style: bold; }
    #status { padding: 1 1; height: 3; color: $text-muted; }
    #status.error { color: $error; }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("l", "lock", "Lock"),
        ("u", "unlock", "Unlock"),
    ]

    def __init__(self, ctx: CliContext | None = None):
        self.ctx = ctx or build_context()
        super().__init__()
        self.path_input: Input | None = None
        self.password_input: Input | None = None
        self.status: Static | None = None
        self.busy: bool = False
        self.status_text: str = ""

    def compose(self) -> ComposeResult:  # pragma: no cover - UI only
        yield Header()
        with Vertical(id="form"):
            yield Static("Seal or restore a file", classes="title")
            yield Label("File or container path")
            self.path_input = Input(placeholder="/path/to/file", id="path")
            yield self.path_input
            yield Label(f"Password (at least {self.ctx.policy.min_length} characters to lock)")
            self.password_input = Input(password=True, id="password")
            yield self.password_input
            with Horizontal(id="buttons"):
                yield Button("Lock", id="lock", variant="primary")
                yield Button("Unlock", id="unlock")
            self.status = Static("", id="status")
            yield self.status
        yield Footer()

    # ------------------------------------------------------------------
    # Status / form state
    # ------------------------------------------------------------------

    def set_status(self, msg: str, is_error: bool = False) -> None:
        self.status_text = msg
        if self.status is None:
            return
        self.status.update(msg)
        self.status.set_class(is_error, "error")

    def _set_busy(self, busy: bool) -> None:
        self.busy = busy
        for button in self.query(Button):
            button.disabled = busy

    def _phase(self, phase: Phase) -> None:
        # called from the worker thread
        self.call_from_thread(self.set_status, phase.value)

    def _form_values(self) -> tuple[Optional[Path], str]:
        raw = self.path_input.value.strip() if self.path_input else ""
        password = self.password_input.value if self.password_input else ""
        return (Path(raw).expanduser() if raw else None), password

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:  # pragma: no cover - UI only
        if event.button.id == "lock":
            self.action_lock()
        elif event.button.id == "unlock":
            self.action_unlock()

    def action_lock(self) -> None:
        if self.busy:
            return
        path, password = self._form_values()
        if path is None or not path.is_file():
            self.set_status("No file selected", is_error=True)
            return
        if len(password) < self.ctx.policy.min_length:
            self.set_status(
                f"Password must be at least {self.ctx.policy.min_length} characters", is_error=True
            )
            return
        self._start(self._lock_worker, path, password)

    def action_unlock(self) -> None:
        if self.busy:
            return
        path, password = self._form_values()
        if path is None or not path.is_file():
            self.set_status("No file selected", is_error=True)
            return
        if not password:
            self.set_status("Password required", is_error=True)
            return
        self._start(self._unlock_worker, path, password)

    def _start(self, target, path: Path, password: str) -> None:
        self._set_busy(True)
        self.set_status("Reading file...")
        threading.Thread(target=target, args=(path, password), daemon=True).start()

    def _finish(self, msg: str, is_error: bool = False) -> None:
        self.set_status(msg, is_error=is_error)
        self._set_busy(False)

    # ------------------------------------------------------------------
    # Workers (run off the UI thread)
    # ------------------------------------------------------------------

    def _lock_worker(self, path: Path, password: str) -> None:
        try:
            data, name, mime_type = files.read_source(path)
            container = seal(
                data, name, mime_type, password, policy=self.ctx.policy, progress=self._phase
            )
            out_path = self.ctx.output_dir / files.opaque_name()
            out_path.write_bytes(container)
        except FileSealError as e:
            self.call_from_thread(self._finish, f"Encryption failed: {e.user_message}", True)
        except OSError as e:
            self.call_from_thread(self._finish, f"Encryption failed: {e}", True)
        else:
            self.call_from_thread(
                self._finish, f"File encrypted: {out_path.name} ({_human_size(len(container))})"
            )

    def _unlock_worker(self, path: Path, password: str) -> None:
        try:
            container = path.read_bytes()
            restored = open_container(container, password, progress=self._phase)
            target = files.safe_output_path(self.ctx.output_dir, restored.filename)
            target.write_bytes(restored.data)
        except FileSealError as e:
            self.call_from_thread(self._finish, e.user_message, True)
        except (OSError, ValueError) as e:
            self.call_from_thread(self._finish, str(e), True)
        else:
            self.call_from_thread(self._finish, f"File restored: {target.name}")


if __name__ == "__main__":
    FileSealApp().run()
