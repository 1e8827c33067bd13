from __future__ import annotations

import logging
import os

import typer


WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def running_in_actions() -> bool:
    return (os.getenv("GITHUB_ACTIONS", "") or "").strip().lower() == "true"


class WorkflowCommandHandler(logging.Handler):
    """Render log records as GitHub Actions workflow commands on stdout."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            command = WORKFLOW_COMMANDS.get(record.levelno)
            if command is None:
                typer.echo(msg)
            else:
                typer.echo(f"::{command}::{escape_data(msg)}")
        except Exception:
            self.handleError(record)


class ConsoleHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = f"{record.levelname.lower()}: {self.format(record)}"
            color = typer.colors.RED if record.levelno >= logging.ERROR else None
            if record.levelno == logging.WARNING:
                color = typer.colors.YELLOW
            typer.secho(msg, fg=color, err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False, actions: bool | None = None) -> logging.Handler:
    if actions is None:
        actions = running_in_actions()

    logger = logging.getLogger("lint_scope")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if actions:
        # the runner hides ::debug:: unless step debugging is enabled
        handler: logging.Handler = WorkflowCommandHandler()
        logger.setLevel(logging.DEBUG)
    else:
        handler = ConsoleHandler()
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return handler
