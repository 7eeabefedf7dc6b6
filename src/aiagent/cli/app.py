"""Main CLI application using Typer."""
import asyncio
import os

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..conversation import ConversationController
from ..diagnostics import ConsoleLogSink, LogLevel
from ..llm import ChatMessage, Role
from .providers import (
    API_KEY_ENV,
    get_api_key,
    get_controller,
    get_provider_name,
    get_service,
    get_store,
)

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="aiagent",
    help="Chat with a hosted language model from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

EXIT_WORDS = ("exit", "quit", "q")


def _make_sink(log_level: str | None) -> ConsoleLogSink:
    """Console sink; errors only unless --log-level asks for more."""
    level = LogLevel.from_string(log_level) if log_level else LogLevel.ERROR
    return ConsoleLogSink(console, level)


def _build_controller(log_level: str | None) -> ConversationController:
    try:
        return get_controller(console, debug_callback=_make_sink(log_level))
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _print_message(message: ChatMessage) -> None:
    if message.role == Role.USER:
        console.print(f"[bold yellow]You:[/bold yellow] {escape(message.content)}")
    else:
        console.print(f"[bold cyan]Assistant:[/bold cyan] {escape(message.content)}")


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show diagnostics at level: debug (all), info, warning, or error"
    ),
):
    """Interactive chat session. History is kept between runs."""
    async def _chat():
        controller = _build_controller(log_level)

        try:
            console.print("[bold cyan]AI Agent Chat[/bold cyan]")
            console.print("[dim]Type '/clear' to forget the conversation, 'exit', 'quit', or 'q' to leave[/dim]\n")

            history = controller.history
            if history:
                for message in history:
                    _print_message(message)
                console.print()
            else:
                console.print("[dim]Start chatting with your AI assistant![/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    command = user_input.strip().lower()
                    if command in EXIT_WORDS:
                        console.print("[dim]Goodbye![/dim]")
                        break
                    if command == "/clear":
                        controller.clear()
                        console.print("[dim]Conversation cleared.[/dim]\n")
                        continue

                    with console.status("[dim]Thinking...[/dim]"):
                        reply = await controller.submit(user_input)

                    if reply is not None:
                        console.print(f"[bold cyan]Assistant:[/bold cyan] {escape(reply.content)}\n")

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await controller.close()

    asyncio.run(_chat())


@app.command()
def send(
    text: str = typer.Argument(..., help="Message to send"),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show diagnostics at level: debug (all), info, warning, or error"
    ),
):
    """Send one message and print the reply."""
    if not text.strip():
        console.print("[yellow]Nothing to send[/yellow]")
        raise typer.Exit(code=1)

    async def _send():
        controller = _build_controller(log_level)
        try:
            reply = await controller.submit(text)
        finally:
            await controller.close()
        if reply is not None:
            console.print(reply.content, markup=False, emoji=False)

    asyncio.run(_send())


@app.command()
def history(
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        help="Only show the last N messages (0 shows all)"
    ),
):
    """Show the stored conversation."""
    from ..conversation import HISTORY_KEY, HistoryParseError, parse_history

    try:
        store = get_store()
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    raw = store.get(HISTORY_KEY)
    messages: list[ChatMessage] = []
    if raw is not None:
        try:
            messages = parse_history(raw)
        except HistoryParseError as e:
            console.print(f"[yellow]Warning: {escape(str(e))}[/yellow]")

    if not messages:
        console.print("[yellow]No conversation stored[/yellow]")
        return

    if limit > 0:
        messages = messages[-limit:]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Role", style="yellow", width=10)
    table.add_column("Content")

    for i, message in enumerate(messages, 1):
        table.add_row(str(i), str(message.role), escape(message.content))

    console.print(table)


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    )
):
    """Clear the stored conversation."""
    if not yes:
        console.print("[yellow]WARNING: This will delete the stored conversation![/yellow]")
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    from ..conversation import HISTORY_KEY

    try:
        store = get_store()
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    store.remove(HISTORY_KEY)
    console.print("[green]Conversation cleared.[/green]")


@app.command()
def health():
    """Check configuration: provider, model, credential and store."""
    all_healthy = True

    provider = get_provider_name()
    console.print(f"[green]+[/green] Provider: {provider}")

    try:
        service = get_service(Console(quiet=True))
    except ValueError as e:
        console.print(f"[red]x[/red] Completion service: FAILED ({e})")
        raise typer.Exit(code=1)

    console.print(f"[green]+[/green] Model: {service.model}")
    asyncio.run(service.close())

    env_var = API_KEY_ENV.get(provider, "API key")
    if get_api_key(provider):
        console.print(f"[green]+[/green] {env_var}: SET")
    else:
        console.print(f"[yellow]![/yellow] {env_var}: NOT SET")
        all_healthy = False

    try:
        store = get_store()
        location = getattr(store, "path", None)
        detail = f" ({location})" if location else ""
        console.print(f"[green]+[/green] Store: {store.backend_type}{detail}")
    except ValueError as e:
        console.print(f"[red]x[/red] Store: FAILED ({e})")
        all_healthy = False

    if os.getenv("LLM_BASE_URL"):
        console.print(Panel(os.environ["LLM_BASE_URL"], title="Endpoint override", border_style="dim"))

    if not all_healthy:
        raise typer.Exit(code=1)


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        controller = _build_controller(None)
        try:
            await run_textual_tui(controller=controller, log_level=log_level)
        finally:
            await controller.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
