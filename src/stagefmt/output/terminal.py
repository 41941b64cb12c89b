"""Rich terminal reporter — per-file table, summary, verdict."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from stagefmt.results.models import FileResult, Outcome, RunResult

_OUTCOME_STYLE = {
    Outcome.FORMATTED: "bold green",
    Outcome.UNCHANGED: "dim",
    Outcome.SKIPPED: "yellow",
    Outcome.FAILED: "bold red",
}


def _outcome_cell(result: FileResult) -> Text:
    label = result.outcome.value
    if result.working_tree_conflict:
        label += " (conflict)"
    return Text(label, style=_OUTCOME_STYLE.get(result.outcome, ""))


def render(result: RunResult, *, show_summary: bool = True, verbose: bool = False) -> None:
    """Print a run result to stderr.

    Unchanged and skipped files are listed only with *verbose*.
    """
    console = Console(stderr=True)

    if not result.files:
        console.print("[dim]No staged files matched.[/dim]")
        return

    rows = [
        f for f in result.files
        if verbose or f.outcome in (Outcome.FORMATTED, Outcome.FAILED) or f.working_tree_conflict
    ]
    if rows:
        table = Table(title="stagefmt", show_lines=False, title_style="bold", border_style="dim")
        table.add_column("Outcome", justify="center", min_width=10)
        table.add_column("File", style="magenta")
        table.add_column("Details")
        for f in rows:
            table.add_row(_outcome_cell(f), Text(f.path), Text(f.message))
        console.print(table)

    for f in result.files:
        if f.diagnostics.strip():
            console.print(f"[bold]{escape(f.path)}[/bold] [dim]formatter output:[/dim]")
            console.print(Text(f.diagnostics.rstrip()))

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.failed:
        console.print(
            f"[bold red]✗ {len(result.failures)} file(s) failed to format.[/bold red]"
        )
    elif result.conflicts:
        console.print(
            "[bold yellow]⚠  Index updated, but some working tree files could not be "
            "patched. Review them before committing.[/bold yellow]"
        )
    else:
        console.print("[bold green]✓ Staged files formatted.[/bold green]")


def _print_summary(console: Console, result: RunResult) -> None:
    console.print()
    console.print(f"[dim]Formatted:[/dim]  {len(result.formatted)}")
    console.print(f"[dim]Unchanged:[/dim]  {len(result.unchanged)}")
    console.print(f"[dim]Skipped:[/dim]    {len(result.skipped)}")
    console.print(f"[dim]Failed:[/dim]     {len(result.failures)}")
    console.print(f"[dim]Conflicts:[/dim]  {len(result.conflicts)}")
    console.print(f"[dim]Duration:[/dim]   {result.duration_ms:.0f}ms")
