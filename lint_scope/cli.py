from __future__ import annotations

from pathlib import Path
import os
import typer

from lint_scope.config import load_settings
from lint_scope.diagnostics import configure_logging
from lint_scope.events import load_event_context
from lint_scope.reporters import write_github_output, write_json_report, write_markdown_summary
from lint_scope.resolver import get_changed_files

app = typer.Typer(help="lint-scope: list the files a CI event added or modified")


@app.callback()
def main() -> None:
    """lint-scope command group."""


@app.command()
def resolve(
    path: str = typer.Option(".", help="Path to the git working tree"),
    files: str | None = typer.Option(None, help="Comma-separated include globs (default: **.php)"),
    exclude: str | None = typer.Option(None, help="Comma-separated exclude globs"),
    config: str | None = typer.Option(None, help="Config YAML path"),
    event_name: str | None = typer.Option(None, help="CI event name (default: $GITHUB_EVENT_NAME)"),
    event_path: str | None = typer.Option(None, help="Event payload JSON (default: $GITHUB_EVENT_PATH)"),
    timeout: float | None = typer.Option(None, help="git diff timeout in seconds"),
    json_out: str | None = typer.Option(None, help="Optional JSON report output path"),
    github_output: str | None = typer.Option(None, help="Step output file (default: $GITHUB_OUTPUT)"),
    summary_out: str | None = typer.Option(None, help="Step summary file (default: $GITHUB_STEP_SUMMARY)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug diagnostics"),
) -> None:
    root = Path(path).resolve()
    if not root.exists():
        typer.secho(f"Path does not exist: {root}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    configure_logging(verbose=verbose)

    try:
        settings = load_settings(root, config_path=config, files=files, exclude=exclude, timeout=timeout)
    except (FileNotFoundError, ValueError) as exc:
        typer.secho(f"Invalid configuration: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    try:
        name, payload = load_event_context(event_name, event_path)
    except ValueError as exc:
        typer.secho(f"Invalid event payload: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    change_set = get_changed_files(name, payload, settings, root=root)

    counts = change_set.counts()
    typer.echo(f"Changed files added={counts['added']} modified={counts['modified']} total={counts['total']}")
    for p in change_set.added:
        typer.echo(f"A {p}")
    for p in change_set.modified:
        typer.echo(f"M {p}")

    if json_out:
        write_json_report(change_set, Path(json_out))
        typer.echo(f"Wrote: {json_out}")

    output_file = github_output or os.getenv("GITHUB_OUTPUT")
    if output_file:
        write_github_output(change_set, Path(output_file))

    summary_file = summary_out or os.getenv("GITHUB_STEP_SUMMARY")
    if summary_file:
        write_markdown_summary(change_set, Path(summary_file))


if __name__ == "__main__":
    app()
