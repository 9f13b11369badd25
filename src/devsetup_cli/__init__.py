#!/usr/bin/env python3
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "typer",
#     "rich",
#     "readchar",
# ]
# ///
"""
DevSetup CLI - Interactive development environment setup wizard

Usage:
    uvx --from . devsetup setup
    uvx --from . devsetup setup --language go --target-version 1.22.0

Or install globally:
    uv tool install --from . devsetup-cli
    devsetup setup
    devsetup check
"""

import os
import sys
import time
from dataclasses import dataclass, replace
from typing import List, Optional

import typer
from rich import box
from rich.align import Align
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich.tree import Tree
from typer.core import TyperGroup

# For cross-platform keyboard input
import readchar

from devsetup_cli.catalog import (
    LANGUAGE_LABELS,
    EditorOption,
    available_versions,
    editor_options,
    find_language_label,
    normalize_language,
)
from devsetup_cli.toolchain import VERSION_COMMANDS, ProbeResult, probe

HIGHLIGHT_STYLE = "bold color(212)"
SUBTLE_STYLE = "color(241)"
HEADER_STYLE = "bold color(86)"
ERROR_STYLE = "bold color(161)"
SUMMARY_BORDER_STYLE = "color(63)"

SETUP_DELAY = 2.0
SETUP_MESSAGE = "Setting up your development environment..."

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}

# ASCII Art Banner
BANNER = """
██████╗ ███████╗██╗   ██╗███████╗███████╗████████╗██╗   ██╗██████╗
██╔══██╗██╔════╝██║   ██║██╔════╝██╔════╝╚══██╔══╝██║   ██║██╔══██╗
██║  ██║█████╗  ██║   ██║███████╗█████╗     ██║   ██║   ██║██████╔╝
██║  ██║██╔══╝  ╚██╗ ██╔╝╚════██║██╔══╝     ██║   ██║   ██║██╔═══╝
██████╔╝███████╗ ╚████╔╝ ███████║███████╗   ██║   ╚██████╔╝██║
╚═════╝ ╚══════╝  ╚═══╝  ╚══════╝╚══════╝   ╚═╝    ╚═════╝ ╚═╝
"""

TAGLINE = "DevSetup - Development Environment Setup Wizard"


class PromptAborted(Exception):
    """The user cancelled a prompt or input ended."""


class InvalidSelection(ValueError):
    """A pre-answered choice is not offered for the selected language."""


def parse_bool_env(value: Optional[str]) -> bool:
    """Parse a boolean environment value; absent or unparsable values are false."""
    return value in _TRUE_VALUES


def english_join(items: List[str], oxford: bool = True) -> str:
    """Join items the way a sentence would: 'a', 'a and b', 'a, b, and c'."""
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    separator = ", and " if oxford else " and "
    return ", ".join(items[:-1]) + separator + items[-1]


@dataclass(frozen=True)
class Session:
    """Selections gathered during one run of the wizard."""
    language: str = ""
    version: str = ""
    probe: ProbeResult = ProbeResult(found=False)
    editors: tuple[str, ...] = ()


class StepTracker:
    """Track and render a flat list of steps as a tree.
    Supports live auto-refresh via an attached refresh callback.
    """
    def __init__(self, title: str):
        self.title = title
        self.steps = []  # list of dicts: {key, label, status, detail}
        self._refresh_cb = None  # callable to trigger UI refresh

    def attach_refresh(self, cb):
        self._refresh_cb = cb

    def add(self, key: str, label: str):
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})
            self._maybe_refresh()

    def start(self, key: str, detail: str = ""):
        self._update(key, status="running", detail=detail)

    def complete(self, key: str, detail: str = ""):
        self._update(key, status="done", detail=detail)

    def error(self, key: str, detail: str = ""):
        self._update(key, status="error", detail=detail)

    def _update(self, key: str, status: str, detail: str):
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                self._maybe_refresh()
                return
        # If not present, add it
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})
        self._maybe_refresh()

    def _maybe_refresh(self):
        if self._refresh_cb:
            try:
                self._refresh_cb()
            except Exception:
                pass

    def render(self):
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        symbols = {
            "done": "[green]●[/green]",
            "pending": "[green dim]○[/green dim]",
            "running": "[cyan]○[/cyan]",
            "error": "[red]●[/red]",
        }
        for step in self.steps:
            label = escape(step["label"])
            detail_text = escape(step["detail"].strip()) if step["detail"] else ""
            status = step["status"]
            symbol = symbols.get(status, " ")

            if status == "pending":
                # Entire line light gray (pending)
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                # Label white, detail (if any) light gray in parentheses
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree


def get_key():
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    # Arrow keys
    if key == readchar.key.UP:
        return 'up'
    if key == readchar.key.DOWN:
        return 'down'

    # Enter/Return
    if key == readchar.key.ENTER:
        return 'enter'

    # Toggle in multi-select
    if key == readchar.key.SPACE:
        return 'space'

    if key == readchar.key.BACKSPACE:
        return 'backspace'

    # Escape
    if key == readchar.key.ESC:
        return 'escape'

    # Ctrl+C
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def select_with_arrows(options: dict, prompt_text: str = "Select an option") -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    Args:
        options: Dict with keys as option keys and values as descriptions
        prompt_text: Text to show above the options

    Returns:
        Selected option key
    """
    option_keys = list(options.keys())
    if not option_keys:
        raise PromptAborted("no options to choose from")
    selected_index = 0

    selected_key = None

    def create_selection_panel():
        """Create the selection panel with current selection highlighted."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            marker = "▶" if i == selected_index else " "
            description = options[key]
            if description:
                table.add_row(marker, f"[cyan]{escape(key)}[/cyan] [dim]({escape(description)})[/dim]")
            else:
                table.add_row(marker, f"[cyan]{escape(key)}[/cyan]")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2)
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise PromptAborted("user aborted") from None
            if key == 'up':
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == 'down':
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == 'enter':
                selected_key = option_keys[selected_index]
                break
            elif key == 'escape':
                raise PromptAborted("user aborted")

            live.update(create_selection_panel(), refresh=True)

    return selected_key


def multi_select_with_arrows(options: List[EditorOption], prompt_text: str = "Select options") -> List[str]:
    """
    Interactive multi-selection using arrow keys, Space to toggle and typing to filter.

    Returns:
        Values of the toggled options, in the order they were offered
    """
    chosen = {opt.value for opt in options if opt.selected}
    filter_text = ""
    cursor = 0

    def visible():
        needle = filter_text.lower()
        return [opt for opt in options if needle in opt.label.lower()]

    def create_selection_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        shown = visible()
        for i, opt in enumerate(shown):
            marker = "▶" if i == cursor else " "
            check = "[green]\\[x][/green]" if opt.value in chosen else "[dim]\\[ ][/dim]"
            table.add_row(marker, f"{check} [cyan]{escape(opt.label)}[/cyan]")
        if not shown:
            table.add_row("", "[dim]No matches[/dim]")

        table.add_row("", "")
        if filter_text:
            table.add_row("", f"[yellow]Filter:[/yellow] {escape(filter_text)}")
        table.add_row("", "[dim]↑/↓ navigate, Space toggle, type to filter, Enter to confirm, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2)
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise PromptAborted("user aborted") from None
            shown = visible()
            if key == 'up' and shown:
                cursor = (cursor - 1) % len(shown)
            elif key == 'down' and shown:
                cursor = (cursor + 1) % len(shown)
            elif key == 'space' and shown:
                value = shown[cursor].value
                if value in chosen:
                    chosen.discard(value)
                else:
                    chosen.add(value)
            elif key == 'backspace':
                filter_text = filter_text[:-1]
                cursor = 0
            elif key == 'enter':
                break
            elif key == 'escape':
                raise PromptAborted("user aborted")
            elif len(key) == 1 and key.isprintable():
                filter_text += key
                cursor = 0

            live.update(create_selection_panel(), refresh=True)

    return [opt.value for opt in options if opt.value in chosen]


class ArrowPrompter:
    """Fancy prompts driven by arrow keys."""

    def select(self, title: str, options: dict) -> str:
        return select_with_arrows(options, title)

    def multi_select(self, title: str, options: List[EditorOption]) -> List[str]:
        return multi_select_with_arrows(options, title)


class AccessiblePrompter:
    """Plain numbered prompts for screen readers and non-interactive input."""

    def __init__(self, stream=None):
        self.stream = stream

    def _ask(self, title: str, **kwargs) -> str:
        try:
            return Prompt.ask(title, console=console, stream=self.stream, **kwargs)
        except (EOFError, KeyboardInterrupt):
            raise PromptAborted("input ended") from None

    def select(self, title: str, options: dict) -> str:
        keys = list(options.keys())
        if not keys:
            raise PromptAborted("no options to choose from")
        console.print(title)
        for i, key in enumerate(keys, start=1):
            description = f" ({options[key]})" if options[key] else ""
            console.print(f"  {i}. {escape(key)}{escape(description)}", highlight=False)
        answer = self._ask(
            "Enter a number",
            choices=[str(i) for i in range(1, len(keys) + 1)],
            default="1",
        )
        return keys[int(answer) - 1]

    def multi_select(self, title: str, options: List[EditorOption]) -> List[str]:
        console.print(title)
        for i, opt in enumerate(options, start=1):
            console.print(f"  {i}. {escape(opt.label)}", highlight=False)
        default = ",".join(str(i) for i, opt in enumerate(options, start=1) if opt.selected)
        while True:
            answer = self._ask("Enter numbers separated by commas, or 'none'", default=default)
            indices = parse_number_list(answer, len(options))
            if indices is None:
                console.print("[red]Please enter numbers from the list.[/red]")
                continue
            return [options[i - 1].value for i in sorted(indices)]


def parse_number_list(answer: str, count: int) -> Optional[set]:
    """Parse '1, 3' into {1, 3}. Returns None when an entry is out of range or not a number."""
    answer = answer.strip()
    if not answer or answer.lower() == "none":
        return set()
    indices = set()
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdecimal() or not 1 <= int(part) <= count:
            return None
        indices.add(int(part))
    return indices


console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        # Show banner before help
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="devsetup",
    help="Interactive wizard for setting up a development environment",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    # Create gradient effect with different colors
    banner_lines = BANNER.strip().split('\n')
    colors = ["bright_blue", "blue", "cyan", "bright_cyan", "white", "bright_white"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        color = colors[i % len(colors)]
        styled_banner.append(line + "\n", style=color)

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


@app.callback()
def callback(ctx: typer.Context):
    """Show banner when no subcommand is provided."""
    # Show banner only when no subcommand and no help flag
    # (help is handled by BannerGroup)
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'devsetup --help' for usage information[/dim]"))
        console.print()


def stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def _command_line(language: str) -> str:
    return " ".join(VERSION_COMMANDS.get(normalize_language(language), ()))


def choose_language(session: Session, prompter, preset: Optional[str] = None) -> Session:
    if preset:
        label = find_language_label(preset)
        if label is None:
            raise InvalidSelection(
                f"Invalid language '{preset}'. Choose from: "
                f"{', '.join(normalize_language(lbl) for lbl in LANGUAGE_LABELS)}"
            )
    else:
        options = {label: _command_line(label) for label in LANGUAGE_LABELS}
        label = prompter.select("Choose a programming language", options)
    return replace(session, language=label)


def probe_language(session: Session) -> Session:
    return replace(session, probe=probe(session.language))


def render_probe_note(session: Session) -> Text:
    """Describe the existing installation (or its absence) for the chosen language."""
    result = session.probe
    if result.found:
        return Text.assemble(
            (f"Found {session.language} installation:", HIGHLIGHT_STYLE),
            "\nVersion: ",
            (result.version or "", HIGHLIGHT_STYLE),
            "\nPath: ",
            (result.executable_path or "", SUBTLE_STYLE),
        )
    return Text.assemble(
        ("No existing installation found", SUBTLE_STYLE),
        "\n",
        ("You can proceed with a fresh installation", SUBTLE_STYLE),
    )


def choose_version(session: Session, prompter, preset: Optional[str] = None) -> Session:
    versions = available_versions(session.language)
    if not versions:
        return session
    if preset:
        wanted = preset.strip()
        matches = [v for v in versions if v == wanted or v.split(" ")[0] == wanted]
        if not matches:
            raise InvalidSelection(
                f"Invalid version '{preset}' for {normalize_language(session.language)}. "
                f"Choose from: {', '.join(v.split(' ')[0] for v in versions)}"
            )
        version = matches[0]
    else:
        version = prompter.select("Choose version to install", {v: "" for v in versions})
    return replace(session, version=version)


def choose_editors(session: Session, prompter, preset: Optional[List[str]] = None) -> Session:
    options = editor_options(session.language)
    if preset:
        by_name = {opt.value.lower(): opt.value for opt in options}
        unknown = [name for name in preset if name.strip().lower() not in by_name]
        if unknown:
            raise InvalidSelection(
                f"Invalid editor '{unknown[0]}' for {normalize_language(session.language)}. "
                f"Choose from: {', '.join(opt.value for opt in options)}"
            )
        wanted = {by_name[name.strip().lower()] for name in preset}
        selected = [opt.value for opt in options if opt.value in wanted]
    else:
        selected = prompter.multi_select("Development Editors", options)
    # Deduplicate while keeping catalog order
    return replace(session, editors=tuple(dict.fromkeys(selected)))


def run_setup_step(accessible: bool = False, delay: float = SETUP_DELAY) -> None:
    """Placeholder for installation work: waits for *delay* seconds under a spinner."""
    if accessible:
        console.print(SETUP_MESSAGE)
        time.sleep(delay)
        return
    with console.status(f"[cyan]{SETUP_MESSAGE}[/cyan]"):
        time.sleep(delay)


def build_summary(session: Session) -> Panel:
    text = Text.assemble(
        ("DEV ENVIRONMENT SETUP COMPLETE", HEADER_STYLE),
        "\n\nLanguage: ",
        (session.language, HIGHLIGHT_STYLE),
        "\nVersion: ",
        (session.version, HIGHLIGHT_STYLE),
        "\nEditors: ",
        (english_join(list(session.editors)), HIGHLIGHT_STYLE),
    )
    if session.probe.found and session.probe.version:
        text.append("\n\nPrevious version: ")
        text.append(session.probe.version, style=SUBTLE_STYLE)
    return Panel(
        text,
        width=60,
        box=box.ROUNDED,
        border_style=SUMMARY_BORDER_STYLE,
        padding=(1, 2),
    )


def run_wizard(
    prompter,
    *,
    language: Optional[str] = None,
    version: Optional[str] = None,
    editors: Optional[List[str]] = None,
    accessible: bool = False,
    setup_delay: float = SETUP_DELAY,
) -> Session:
    """Walk through language, version and editor selection, then run the setup step."""
    session = Session()
    session = choose_language(session, prompter, language)
    session = probe_language(session)
    console.print()
    console.print(render_probe_note(session))

    session = choose_version(session, prompter, version)
    if session.language and session.version:
        session = choose_editors(session, prompter, editors)

    run_setup_step(accessible, setup_delay)
    return session


@app.command()
def setup(
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language to set up: python, javascript, go, rust or java"),
    target_version: Optional[str] = typer.Option(None, "--target-version", "-t", help="Version to install, e.g. 3.12.1"),
    editor: Optional[List[str]] = typer.Option(None, "--editor", "-e", help="Editor to include (repeatable)"),
    accessible: bool = typer.Option(False, "--accessible", help="Use plain numbered prompts instead of arrow-key menus (or set ACCESSIBLE=1)"),
    setup_delay: float = typer.Option(SETUP_DELAY, "--setup-delay", min=0, help="Seconds spent in the setup step"),
):
    """
    Run the setup wizard.

    This command will:
    1. Let you choose a programming language
    2. Detect an existing installation of that language
    3. Let you choose a version to install and your editors
    4. Print a summary of your choices

    Examples:
        devsetup setup
        devsetup setup --language go
        devsetup setup --language python --target-version 3.12.1 --editor PyCharm
        ACCESSIBLE=1 devsetup setup
    """
    accessible = accessible or parse_bool_env(os.environ.get("ACCESSIBLE"))
    # Fall back to plain prompts when stdin is not a TTY
    if accessible or not stdin_is_interactive():
        prompter = AccessiblePrompter()
    else:
        prompter = ArrowPrompter()

    try:
        session = run_wizard(
            prompter,
            language=language,
            version=target_version,
            editors=editor,
            accessible=accessible or isinstance(prompter, AccessiblePrompter),
            setup_delay=setup_delay,
        )
    except InvalidSelection as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except PromptAborted as e:
        console.print(Text(f"Error: {e}", style=ERROR_STYLE))
        raise typer.Exit(1)

    console.print(build_summary(session))


@app.command()
def check():
    """Check which language toolchains are already installed."""
    show_banner()
    console.print("[bold]Checking for installed toolchains...[/bold]\n")

    tracker = StepTracker("Check Installed Toolchains")
    for label in LANGUAGE_LABELS:
        tracker.add(normalize_language(label), f"{label} ({_command_line(label)})")

    found = 0
    with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
        tracker.attach_refresh(lambda: live.update(tracker.render()))
        for label in LANGUAGE_LABELS:
            key = normalize_language(label)
            tracker.start(key)
            result = probe(label)
            if result.found:
                found += 1
                tracker.complete(key, f"{result.version} at {result.executable_path}")
            else:
                tracker.error(key, result.reason or "not found")

    # Final static tree (ensures finished state visible after Live context ends)
    console.print(tracker.render())

    if found:
        console.print(f"\n[bold green]{found} of {len(LANGUAGE_LABELS)} toolchains found.[/bold green]")
    else:
        console.print("\n[yellow]No toolchains found.[/yellow]")
        console.print("[dim]Tip: Run 'devsetup setup' to pick one to install[/dim]")


@app.command()
def versions(
    language: Optional[str] = typer.Argument(None, help="Only show this language"),
):
    """List installable versions and recommended editors."""
    if language:
        label = find_language_label(language)
        if label is None:
            console.print(f"[red]Error:[/red] Unknown language '{escape(language)}'. Choose from: {', '.join(normalize_language(lbl) for lbl in LANGUAGE_LABELS)}")
            raise typer.Exit(1)
        labels = [label]
    else:
        labels = list(LANGUAGE_LABELS)

    table = Table(title="Available Versions", border_style="cyan")
    table.add_column("Language", style="cyan")
    table.add_column("Versions", style="white")
    table.add_column("Editors", style="bright_black")
    for label in labels:
        table.add_row(
            label,
            "\n".join(available_versions(label)),
            english_join([opt.value for opt in editor_options(label)]),
        )
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
