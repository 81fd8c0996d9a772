"""Run command — analyse a directory and publish the check run."""

from pathlib import Path
from typing import Optional

import typer

from ..check import CheckOptions, CheckRunner
from ..config import load_config
from ..context import ActionContext
from ..exceptions import RcaCheckError, ToolFailedError
from ..github import ChecksClient
from ..logging_config import setup_logging
from ..rcacli import RcaCli
from ..session import CheckRunSession
from ..workflow import group
from . import app
from ._common import fail


@app.command()
def run(
    directory: Optional[str] = typer.Option(
        None,
        "--directory",
        "-d",
        help="Directory to analyse (action input: directory)",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Display name of the check run (action input: name)",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        envvar="GITHUB_TOKEN",
        help="Token allowed to write check runs (action input: token)",
        show_default=False,
    ),
    annotations_per_request: Optional[int] = typer.Option(
        None,
        "--annotations-per-request",
        help="Annotations sent per update call (at most 50)",
        min=1,
        max=50,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
):
    """
    Run rust-code-analysis-cli and publish its metrics as a check run.

    Each JSON line printed by the tool becomes a collapsible section of the
    check run report and every nested space becomes an annotation.

    [bold cyan]Examples:[/bold cyan]

      rca-check run --directory src

      rca-check run -d crates/core --name "Core metrics"
    """
    logger = setup_logging(verbose=verbose)

    try:
        settings = load_config(
            config_file=config,
            directory=directory,
            name=name,
            token=token,
            annotations_per_request=annotations_per_request,
        )
        if not settings.token:
            raise RcaCheckError("A GitHub token is required (input: token)")

        session = CheckRunSession()
        program = RcaCli.find(settings.executable)
        session.version = program.version()

        with group("Executing rust-code-analysis-cli (JSON output)"):
            for line in program.metrics(settings.directory):
                session.ingest(line)
        logger.info(
            "Parsed %d file record(s), %d annotation(s)",
            len(session.records),
            len(session.annotations),
        )

        context = ActionContext.from_env()
        runner = CheckRunner(
            ChecksClient(
                settings.token,
                api_url=settings.api_url,
                timeout=settings.request_timeout,
                max_text_length=settings.max_text_length,
            ),
            CheckOptions(
                name=settings.name,
                owner=context.owner,
                repo=context.repo,
                head_sha=context.sha,
                started_at=session.started_at,
                is_fork=context.is_fork,
            ),
            annotations_per_request=settings.annotations_per_request,
        )
        state = runner.execute(session)
        logger.info("Check run finished: %s", state.value)

        if program.returncode:
            raise ToolFailedError(program.returncode)

    except RcaCheckError as e:
        logger.debug("Run failed", exc_info=True)
        raise typer.Exit(fail(str(e)))
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        raise typer.Exit(fail(str(e) or type(e).__name__))
