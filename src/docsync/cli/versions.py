"""CLI commands for project version management."""

from typing import Optional

import typer

from docsync.core.api import APIError, DocsAPIClient
from docsync.core.config import API_KEY_ENV
from docsync.core.prompts import TerminalAnswerSource
from docsync.core.versions import create_version

app = typer.Typer(help="Project version management commands")

BOOL_HELP = "Accepts 'true' or 'false'."


@app.command("create")
def create(
    version: Optional[str] = typer.Argument(None, help="Semantic version to create"),
    key: Optional[str] = typer.Option(None, "--key", envvar=API_KEY_ENV, help="Project API key"),
    fork: Optional[str] = typer.Option(
        None, "--fork", help="The semantic version which you'd like to fork from."
    ),
    codename: Optional[str] = typer.Option(
        None, "--codename", help="The codename, or nickname, for the version."
    ),
    main: Optional[str] = typer.Option(
        None, "--main", help=f"Should this version be the primary (default) version? {BOOL_HELP}"
    ),
    beta: Optional[str] = typer.Option(
        None, "--beta", help=f"Should this version be in beta? {BOOL_HELP}"
    ),
    deprecated: Optional[str] = typer.Option(
        None, "--deprecated", help=f"Should this version be deprecated? {BOOL_HELP}"
    ),
    hidden: Optional[str] = typer.Option(
        None, "--hidden", help=f"Should this version be hidden? {BOOL_HELP}"
    ),
) -> None:
    """Create a new version for your project.

    Attributes not given as options are asked for interactively.

    Example:
        docsync versions create 1.2.0 --fork 1.1.0 --main false
    """
    try:
        if not key:
            raise ValueError("No project API key provided. Please use `--key`.")

        with DocsAPIClient(key) as client:
            msg = create_version(
                client,
                TerminalAnswerSource(),
                version,
                fork=fork,
                codename=codename,
                main=main,
                beta=beta,
                deprecated=deprecated,
                hidden=hidden,
            )
        typer.echo(msg)

    except (APIError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Unexpected error: {e}", err=True)
        raise typer.Exit(1)
