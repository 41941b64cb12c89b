"""stagefmt CLI — Typer application with format, install, uninstall, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from stagefmt import __version__

app = typer.Typer(
    name="stagefmt",
    help="Format staged file content with any stdin/stdout formatter.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from stagefmt.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── format ────────────────────────────────────────────────────────────────────


@app.command("format")
def format_staged(
    patterns: Optional[List[str]] = typer.Argument(
        None,
        help=(
            "Files to format: literal paths or globs tested against staged paths. "
            "'src/*.js' matches .js files in src/ and its subdirectories. Prefix a "
            "pattern with '!' to exclude. Evaluated left to right, the last match wins."
        ),
        show_default=False,
    ),
    formatter: Optional[str] = typer.Option(
        None, "--formatter", "-f",
        help=(
            "Shell command that formats stdin to stdout, run once per file. '{}' is "
            "replaced with the file path. Example: \"prettier --stdin-filepath '{}'\""
        ),
    ),
    no_update_working_tree: bool = typer.Option(
        False, "--no-update-working-tree",
        help="Leave working tree files untouched; only staged content is formatted.",
    ),
    no_write: bool = typer.Option(
        False, "--no-write",
        help=(
            "Do not modify staged or working tree files. Formatter stdout is ignored, "
            "which allows checking staged content with a linter."
        ),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the commands being run"),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", min=0, help="Parallel formatter processes (0 = one per CPU)",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0, help="Seconds before a formatter run counts as failed (0 = no limit)",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .stagefmt.toml"),
    format: Optional[str] = typer.Option(None, "--format", help="Report format: terminal | json"),
) -> None:
    """Run the formatter over staged files and write the results back to the index."""
    from stagefmt.config.loader import ConfigError, load_config
    from stagefmt.config.schema import OUTPUT_FORMATS
    from stagefmt.filters.patterns import PatternError, parse_patterns
    from stagefmt.formatter.engine import format_staged_files
    from stagefmt.git.adapter import GitError
    from stagefmt.git.diff_parser import ParseError
    from stagefmt.logging_utils import configure_logging
    from stagefmt.output import json_report, terminal

    configure_logging(verbose)
    repo_root = _resolve_repo_root()

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    fmt_cfg = cfg.format
    if formatter:
        fmt_cfg.formatter = formatter
    if no_update_working_tree:
        fmt_cfg.update_working_tree = False
    if no_write:
        fmt_cfg.write = False
    if jobs is not None:
        fmt_cfg.jobs = jobs
    if timeout is not None:
        fmt_cfg.timeout = timeout or None
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    if not fmt_cfg.formatter:
        console.print(
            "[bold red]Error:[/bold red] no formatter given; pass --formatter "
            "or set format.formatter in .stagefmt.toml"
        )
        raise typer.Exit(code=2)

    # CLI patterns are relative to the current directory, config patterns
    # to the repository root.
    try:
        if patterns:
            signed = parse_patterns(patterns, base=Path.cwd().resolve())
        else:
            signed = parse_patterns(fmt_cfg.patterns, base=repo_root)
    except PatternError as exc:
        console.print(f"[bold red]Invalid file pattern:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose:
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]Formatter: {escape(fmt_cfg.formatter)}[/dim]")
        console.print(f"[dim]Patterns: {escape(' '.join(str(p) for p in signed)) or '(none)'}[/dim]")

    # --- Run ---
    try:
        result = format_staged_files(signed, fmt_cfg, repo_root)
    except (GitError, ParseError) as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, show_summary=cfg.output.show_summary, verbose=verbose)

    raise typer.Exit(code=1 if result.failed else 0)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    patterns: Optional[List[str]] = typer.Argument(
        None, help="Patterns baked into the hook (default: from .stagefmt.toml)", show_default=False,
    ),
    formatter: Optional[str] = typer.Option(
        None, "--formatter", "-f", help="Formatter baked into the hook (default: from .stagefmt.toml)",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-commit hook"),
) -> None:
    """Install stagefmt as a git pre-commit hook."""
    from stagefmt.filters.patterns import PatternError, rebase_pattern
    from stagefmt.hooks.installer import install_hook

    repo_root = _resolve_repo_root()

    # The hook runs from the repository root; patterns typed here are
    # relative to the current directory.
    if patterns:
        cwd = Path.cwd().resolve()
        try:
            patterns = [rebase_pattern(p, cwd, repo_root) for p in patterns]
        except PatternError as exc:
            console.print(f"[bold red]Invalid file pattern:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    success, msg = install_hook(repo_root, force=force, formatter=formatter, patterns=patterns)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove stagefmt pre-commit hook."""
    from stagefmt.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .stagefmt.toml in the repo root."""
    from stagefmt.config.defaults import DEFAULT_TOML
    from stagefmt.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"stagefmt {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """stagefmt — format staged changes before they are committed."""
