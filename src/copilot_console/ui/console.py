"""
Console UI for Copilot Console

Provides the interactive chat loop with rich formatting.
"""

import logging

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from ..core.chat import ChatEngine
from ..config import AppConfig
from ..providers.base import ProviderError

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def is_exit_command(user_input: str) -> bool:
    """True for the exit keyword, ignoring case and surrounding whitespace"""
    return user_input.strip().lower() == EXIT_COMMAND


class ConsoleUI:
    """Interactive console UI for chat"""

    def __init__(self, console: Console, chat_engine: ChatEngine, config: AppConfig):
        self.console = console
        self.chat_engine = chat_engine
        self.config = config

    async def start_interactive_chat(self) -> None:
        """
        Run the chat loop until the user types 'exit'

        Protocol errors from the engine are not handled here; they end the
        session.
        """
        self._show_welcome()

        while True:
            try:
                user_input = self._get_user_input()
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Goodbye![/yellow]")
                break

            if is_exit_command(user_input):
                self.console.print("[yellow]Goodbye![/yellow]")
                break

            if not user_input.strip():
                continue

            await self._send_message(user_input)

    def _show_welcome(self) -> None:
        """Show welcome message"""
        plugins_line = (
            f"[yellow]Plugins enabled[/yellow] ({len(self.chat_engine.registry)})"
            if self.chat_engine.plugins_enabled
            else "[yellow]Plugins disabled[/yellow]"
        )
        welcome_text = f"""
[bold cyan]Model {self.config.openai.model}[/bold cyan]
{plugins_line}

[dim]Type 'exit' to quit.[/dim]
"""
        self.console.print(Panel(welcome_text.strip(), border_style="cyan"))

    def _get_user_input(self) -> str:
        """Get user input with proper formatting"""
        return Prompt.ask("[bold white]>[/bold white]", default="", show_default=False, console=self.console)

    async def _send_message(self, user_input: str) -> None:
        """Send a message and display the response"""
        try:
            response = await self.chat_engine.send_message(user_input)
        except ProviderError as e:
            logger.error("Chat completion failed: %s", e)
            self.console.print(f"[red]Error: {e}[/red]")
            return

        self.console.print(Text(f"> {response.content}\n", style="green"))
