import logging

from lint_scope.diagnostics import configure_logging, escape_data


def test_escape_data():
    assert escape_data("50%\r\nnext") == "50%25%0D%0Anext"


def test_workflow_commands_in_actions(capsys):
    configure_logging(actions=True)
    log = logging.getLogger("lint_scope.resolver")
    log.debug("Base SHA: abc123")
    log.info("Filter patterns: **.php")
    log.warning("slow")
    log.error("git stderr: fatal\nbad revision")

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "::debug::Base SHA: abc123",
        "Filter patterns: **.php",
        "::warning::slow",
        "::error::git stderr: fatal%0Abad revision",
    ]


def test_console_hides_debug_unless_verbose(capsys):
    configure_logging(verbose=False, actions=False)
    log = logging.getLogger("lint_scope.git_scope")
    log.debug("Running: git ls-tree")
    log.error("git exited with 128")

    err = capsys.readouterr().err
    assert "Running: git ls-tree" not in err
    assert "error: git exited with 128" in err


def test_configure_logging_replaces_previous_handler():
    configure_logging(actions=True)
    handler = configure_logging(actions=False, verbose=True)
    logger = logging.getLogger("lint_scope")
    assert logger.handlers == [handler]
    assert logger.level == logging.DEBUG
