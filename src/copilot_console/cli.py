"""
Command-line interface for Copilot Console

Provides the main entry point and interactive chat interface.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import AppConfig, ConfigurationError, ProviderType
from .core.chat import ChatEngine, ProtocolError
from .plugins import (
    DuplicatePluginError,
    PluginContext,
    PluginDefinitionError,
    PluginRegistry,
    canonical_plugin_name,
)
from .plugins.builtin import BUILTIN_PLUGINS
from .providers.factory import ProviderFactory
from .ui.console import ConsoleUI


def configure_logging(level: str, console: Console) -> None:
    """Send log records through rich at the requested level"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # SDK request logs are noise at INFO
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLevelName(level)))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Set logging level",
)
@click.pass_context
def cli(ctx, config: Optional[Path], log_level: Optional[str]):
    """Copilot Console - chat assistant with function plugins"""
    ctx.ensure_object(dict)

    # If no config file specified, look for default config.yaml
    if config is None:
        config_path = Path("config.yaml")
        if not config_path.exists():
            config_path = None
    else:
        config_path = config

    console = Console()
    try:
        app_config = AppConfig.load(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    if log_level:
        app_config.log_level = log_level

    configure_logging(app_config.log_level, console)

    ctx.obj["config"] = app_config
    ctx.obj["console"] = console


def build_registry(app_config: AppConfig, provider, console: Console) -> PluginRegistry:
    """Instantiate the built-in plugins with a shared context"""
    context = PluginContext(config=app_config, provider=provider, console=console)
    return PluginRegistry.from_classes(BUILTIN_PLUGINS, context)


@cli.command()
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderType]),
    help="Override provider type",
)
@click.option(
    "--model",
    help="Override model or deployment name",
)
@click.option(
    "--plugins/--no-plugins",
    default=None,
    help="Enable/disable function plugins",
)
@click.pass_context
def chat(ctx, provider: Optional[str], model: Optional[str], plugins: Optional[bool]):
    """Start an interactive chat session"""
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    # Override config with command-line options
    if provider:
        config.openai.provider_type = ProviderType(provider)
    if model:
        config.openai.model = model
    if plugins is not None:
        config.chat.plugins_enabled = plugins

    try:
        config.validate()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    async def run_chat():
        chat_provider = ProviderFactory.create_provider(config.openai, timeout=config.http_timeout)
        try:
            registry = build_registry(config, chat_provider, console)
            chat_engine = ChatEngine(chat_provider, config.chat, registry)
            ui = ConsoleUI(console, chat_engine, config)
            await ui.start_interactive_chat()
        finally:
            await chat_provider.close()

    try:
        asyncio.run(run_chat())
    except (DuplicatePluginError, PluginDefinitionError) as e:
        console.print(f"[red]Plugin setup failed: {e}[/red]")
        sys.exit(1)
    except ProtocolError as e:
        console.print(f"[red]Fatal: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.pass_context
def config_info(ctx):
    """Display current configuration"""
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    console.print(Panel.fit("Current Configuration", style="bold blue"))

    console.print(f"[bold]Provider:[/bold] {config.openai.provider_type.value}")
    console.print(f"[bold]Endpoint:[/bold] {config.openai.endpoint or '-'}")
    console.print(f"[bold]Model:[/bold] {config.openai.model}")
    console.print(f"[bold]Quick Prompt Model:[/bold] {config.openai.resolve_quick_prompt_model()}")
    console.print(f"[bold]API Key:[/bold] {'set' if config.openai.api_key else 'missing'}")

    console.print()

    console.print(f"[bold]GitHub Org:[/bold] {config.github.org or '-'}")
    console.print(f"[bold]GitHub Token:[/bold] {'set' if config.github.token else 'missing'}")
    console.print(f"[bold]Bing Endpoint:[/bold] {config.bing.endpoint}")
    console.print(f"[bold]Bing Key:[/bold] {'set' if config.bing.api_key else 'missing'}")

    console.print()

    sampling = config.chat.sampling
    console.print(f"[bold]Plugins:[/bold] {'Enabled' if config.chat.plugins_enabled else 'Disabled'}")
    console.print(f"[bold]Temperature:[/bold] {sampling.temperature}")
    console.print(f"[bold]Top P:[/bold] {sampling.top_p}")
    console.print(f"[bold]Max Tokens:[/bold] {sampling.max_tokens}")
    console.print(f"[bold]Log Level:[/bold] {config.log_level}")


@cli.command(name="plugins")
@click.pass_context
def list_plugins(ctx):
    """List the plugins offered to the model"""
    console = ctx.obj["console"]

    table = Table(title="Plugins")
    table.add_column("Name", style="bold")
    table.add_column("Function")
    table.add_column("Required")

    for plugin_class in BUILTIN_PLUGINS:
        required = [p.name for p in plugin_class.parameters if p.required]
        table.add_row(canonical_plugin_name(plugin_class.name), plugin_class.name, ", ".join(required))

    console.print(table)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file for config (default: config.yaml)",
)
@click.pass_context
def init_config(ctx, output: Optional[Path]):
    """Initialize a default configuration file"""
    console = ctx.obj["console"]

    if output is None:
        output = Path("config.yaml")

    if output.exists():
        if not click.confirm(f"Config file {output} already exists. Overwrite?"):
            return

    config = AppConfig()
    config.save(output)

    console.print(f"[green]Configuration saved to {output}[/green]")
    console.print("[dim]Edit the file to configure your API keys and endpoints[/dim]")


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
