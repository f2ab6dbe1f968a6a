"""
Web Autoclicker - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--speed, --timeout, etc.)
    2. Environment variables (WEB_AUTOCLICKER__REPLAY__SPEED, etc.)
    3. Config file (config.yaml)

Usage:
    web-autoclicker record https://example.com --name login
    web-autoclicker replay recordings/login.json --url https://example.com --speed 2
    web-autoclicker resolve page.html "Sign in"
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from web_autoclicker import __version__
from web_autoclicker.actions.models import Action
from web_autoclicker.config import get_settings
from web_autoclicker.documents.html_document import HtmlDocument
from web_autoclicker.exceptions import AutoclickerError
from web_autoclicker.interfaces.document import IDocument
from web_autoclicker.recorder.recorder import InteractionRecorder
from web_autoclicker.replay.engine import ReplayEngine, ReplayResult
from web_autoclicker.resolver.resolver import ElementResolver
from web_autoclicker.storage.formats import export_actions, import_actions
from web_autoclicker.storage.store import RecordingStore
from web_autoclicker.utils.logging import setup_logging_from_settings

# Create the CLI app
app = typer.Typer(
    name="web-autoclicker",
    help="Record, resolve and replay interactions with web pages",
    add_completion=False,
)

console = Console()


def _format_for(path: Path) -> str:
    return "csv" if path.suffix.lower() == ".csv" else "json"


def _read_actions(file_path: str) -> List[Action]:
    path = Path(file_path)
    if not path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)
    try:
        return import_actions(
            path.read_text(encoding="utf-8"),
            _format_for(path),
            max_length=get_settings().replay.max_actions,
        )
    except AutoclickerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def record(
    url: str = typer.Argument(..., help="Page to record on"),
    name: str = typer.Option("recording", "--name", "-n", help="Recording name"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for recordings"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Record interactions in a visible browser until Enter is pressed.
    """
    settings = get_settings()
    setup_logging_from_settings(settings.logging, verbose)
    store = RecordingStore(output_dir or settings.storage.recordings_dir)

    console.print(Panel.fit(
        f"[bold blue]Web Autoclicker[/bold blue] - recording\n"
        f"[dim]URL:[/dim] {url}\n"
        f"[dim]Name:[/dim] {name}",
        border_style="blue",
    ))

    try:
        actions = asyncio.run(_record_async(url))
    except AutoclickerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if not actions:
        console.print("[yellow]No actions recorded.[/yellow]")
        return

    path = store.save(name, actions, metadata={"url": url})
    console.print(f"[green]Saved {len(actions)} actions to {path}[/green]")


async def _record_async(url: str) -> List[Action]:
    from web_autoclicker.browsers.playwright_browser import PlaywrightBrowser
    from web_autoclicker.recorder.playwright_bridge import PlaywrightRecorderBridge

    settings = get_settings()
    recorder = InteractionRecorder(settings.recorder)
    recorder.on(
        "action-recorded",
        lambda e: console.print(f"[dim]{e['count']:>4}[/dim] {e['action'].describe()}"),
    )

    browser = PlaywrightBrowser(settings.browser.model_copy(update={"headless": False}))
    await browser.launch()
    try:
        page = await browser.new_page(url)
        bridge = PlaywrightRecorderBridge(recorder, page)
        await bridge.attach()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, console.input, "[bold]Press Enter to stop recording[/bold]\n")
        return await bridge.detach() or []
    finally:
        await browser.close()


@app.command()
def replay(
    file_path: str = typer.Argument(..., help="Recording file (.json or .csv)"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Page to replay on"),
    snapshot: Optional[str] = typer.Option(None, "--snapshot", help="Replay against a saved HTML page instead"),
    speed: Optional[float] = typer.Option(None, "--speed", "-s", help="Speed: 0.5, 1, 1.5 or 2"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Per-action timeout in ms"),
    stop_on_error: bool = typer.Option(False, "--stop-on-error", help="Abort on the first failed action"),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", help="Retries per action"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Replay a recorded action sequence.
    """
    settings = get_settings()
    setup_logging_from_settings(settings.logging, verbose)

    if not url and not snapshot:
        console.print("[red]Error: Give a page with --url or --snapshot.[/red]")
        raise typer.Exit(1)

    actions = _read_actions(file_path)

    options = {}
    if speed is not None:
        options["speed"] = speed
    if timeout is not None:
        options["timeout_ms"] = timeout
    if stop_on_error:
        options["stop_on_error"] = True
    if retries is not None:
        options["retry_count"] = retries

    try:
        if snapshot:
            result = asyncio.run(_replay_on(HtmlDocument.from_file(snapshot), actions, options))
        else:
            result = asyncio.run(_replay_live(url, actions, options, headless=not visible))
    except AutoclickerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    _print_result(result)
    if result.failed:
        raise typer.Exit(1)


async def _replay_live(url: str, actions: List[Action], options: dict, headless: bool) -> ReplayResult:
    from web_autoclicker.browsers.playwright_browser import PlaywrightBrowser
    from web_autoclicker.documents.playwright_document import PlaywrightDocument

    settings = get_settings()
    browser = PlaywrightBrowser(settings.browser.model_copy(update={"headless": headless}))
    await browser.launch()
    try:
        page = await browser.new_page(url)
        return await _replay_on(PlaywrightDocument(page), actions, options)
    finally:
        await browser.close()


async def _replay_on(document: IDocument, actions: List[Action], options: dict) -> ReplayResult:
    settings = get_settings()
    resolver = ElementResolver(document, settings.resolver)
    engine = ReplayEngine(document, resolver=resolver, settings=settings.replay)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Replaying", total=len(actions))
        engine.on("progress", lambda p: progress.update(task, completed=p["current"]))
        engine.on(
            "action-failed",
            lambda e: progress.console.print(
                f"[red]✗[/red] #{e['index'] + 1} {e['action'].get('type')} "
                f"{e['action'].get('target', '')!r}: {e['error']}"
            ),
        )
        return await engine.replay(actions, options)


def _print_result(result: ReplayResult) -> None:
    color = "green" if result.success else ("yellow" if result.status.value == "complete" else "red")
    console.print(Panel.fit(
        f"[bold {color}]Replay {result.status.value}[/bold {color}]\n"
        f"[dim]Completed:[/dim] {result.completed}/{result.total}\n"
        f"[dim]Failed:[/dim] {result.failed}\n"
        f"[dim]Duration:[/dim] {result.duration_ms}ms",
        border_style=color,
    ))


@app.command()
def validate(
    file_path: str = typer.Argument(..., help="Recording file (.json or .csv)"),
):
    """
    Validate a recording and list its actions.
    """
    actions = _read_actions(file_path)

    table = Table(title=f"{len(actions)} valid actions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Target")
    table.add_column("Value")
    for index, action in enumerate(actions, start=1):
        value = "" if action.value is None else str(action.value)
        if action.direction:
            value = f"{value} {action.direction.value}".strip()
        table.add_row(str(index), action.type.value, action.target or "", value)
    console.print(table)


@app.command()
def resolve(
    html_file: str = typer.Argument(..., help="Saved HTML page"),
    descriptor: str = typer.Argument(..., help="Text, CSS locator, label or XPath"),
):
    """
    Resolve a descriptor against a saved HTML page.
    """
    if not Path(html_file).exists():
        console.print(f"[red]Error: File not found: {html_file}[/red]")
        raise typer.Exit(1)

    async def run():
        document = HtmlDocument.from_file(html_file)
        resolver = ElementResolver(document, get_settings().resolver)
        target = await resolver.resolve(descriptor)
        info = await target.element.info() if target.is_resolved else None
        return target, info

    target, info = asyncio.run(run())
    if info is None:
        console.print(f"[red]✗ No element matches {descriptor!r}[/red]")
        raise typer.Exit(1)

    element_id = f"#{info.id}" if info.id else ""
    console.print(f"[green]✓[/green] <{info.tag_name}{element_id}> via [bold]{target.strategy.value}[/bold]")
    if info.text:
        console.print(f"[dim]{info.text[:100]}[/dim]")


@app.command()
def convert(
    file_path: str = typer.Argument(..., help="Recording file (.json or .csv)"),
    to: str = typer.Option(..., "--to", help="Target format: json or csv"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
):
    """
    Convert a recording between JSON and CSV.
    """
    actions = _read_actions(file_path)
    try:
        text = export_actions(actions, to)
    except AutoclickerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(actions)} actions to {output}[/green]")
    else:
        typer.echo(text)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Web Autoclicker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
