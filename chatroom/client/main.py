"""
Chat Room Client Main Entry Point

Terminal front-end that drives a chat room session.
"""

import logging
import queue
import sys
import threading
from typing import IO, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from chatroom import __version__
from chatroom.client.network import ChatRoom, ChatRoomBuilder
from chatroom.shared.config import ConfigurationLoader
from chatroom.shared.constants import FRAME_SEPARATOR, QUIT_COMMAND
from chatroom.shared.exceptions import (
    ConfigurationError,
    ConnectionSetupError,
    TransportWriteError,
)
from chatroom.shared.logging_config import configure_from_env
from chatroom.shared.models import Message


logger = logging.getLogger(__name__)


class ConsoleListener:
    """Prints each received message to the console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def received(self, message: Message) -> None:
        timestamp = message.received_at.strftime("%H:%M:%S")
        if message.is_own_message:
            name = "[bold green]You[/bold green]"
        else:
            name = f"[bold cyan]{escape(message.username)}[/bold cyan]"
        self.console.print(f"[dim]{timestamp}[/dim] {name}: {escape(message.text)}")


def read_input_lines(lines: "queue.Queue[Optional[str]]", stream: Optional[IO[str]] = None) -> None:
    """
    Feed lines typed by the user into a queue.

    Runs on a helper thread; a None sentinel marks end of input.
    """
    stream = stream if stream is not None else sys.stdin
    for line in stream:
        lines.put(line.rstrip("\r\n"))
    lines.put(None)


def run_session(room: ChatRoom,
                lines: "queue.Queue[Optional[str]]",
                console: Console,
                poll_interval: float = 0.1) -> None:
    """
    Drive the session until it closes, the user quits, or input ends.

    Args:
        room: A started session.
        lines: Queue of outgoing lines filled by read_input_lines.
        console: Console for user-facing errors.
        poll_interval: Seconds to wait for network events per turn.
    """
    while room.is_open():
        room.poll(poll_interval)

        while room.is_open():
            try:
                line = lines.get_nowait()
            except queue.Empty:
                break

            if line is None or line.strip() == QUIT_COMMAND:
                room.stop()
                return

            if not line.strip():
                continue

            try:
                room.send(line)
            except TransportWriteError as e:
                console.print(f"[red]Failed to send message: {escape(str(e))}[/red]")


def ask_username(console: Console) -> str:
    """Prompt until the user enters a username the wire format can carry."""
    while True:
        username = Prompt.ask("[cyan]Enter your Username[/cyan]", default="Guest").strip()
        if username and FRAME_SEPARATOR not in username:
            return username
        console.print(f"[bold red]Usernames must be non-empty and cannot contain '{FRAME_SEPARATOR}'.[/bold red]")


def main() -> None:
    """Main entry point for the chat client."""
    console = Console()
    configure_from_env()

    console.print(Panel(
        f"[bold cyan]Welcome to the Chat Room!\nVersion: {__version__}[/bold cyan]",
        border_style="cyan"
    ))

    try:
        config = ConfigurationLoader.load_session_config()
        username = ask_username(console)
        room = ChatRoomBuilder(config).build()
    except ConfigurationError as e:
        console.print(f"[bold red]Invalid configuration: {escape(str(e))}[/bold red]")
        sys.exit(1)
    except ConnectionSetupError as e:
        console.print(f"[bold red]Fatal: {escape(str(e))}[/bold red]")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[bold blue]Client startup cancelled.[/bold blue]")
        sys.exit(0)

    room.listener = ConsoleListener(console)
    lines: "queue.Queue[Optional[str]]" = queue.Queue()
    threading.Thread(target=read_input_lines, args=(lines,), daemon=True).start()

    console.print(f"[green]Connected to {escape(config.address)} as {escape(username)}. "
                  f"Type {QUIT_COMMAND} to leave.[/green]")

    try:
        with room:
            room.join_chat(username)
            run_session(room, lines, console)
    except KeyboardInterrupt:
        pass
    except TransportWriteError as e:
        console.print(f"[bold red]Could not join the chat: {escape(str(e))}[/bold red]")
        logger.exception("Join failed")
        sys.exit(1)

    console.print("[bold blue]You have been disconnected. Goodbye![/bold blue]")


if __name__ == "__main__":
    main()
