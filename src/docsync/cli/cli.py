"""docsync CLI - documentation sync commands."""

from typing import Optional

import typer
from dotenv import load_dotenv

from docsync import __version__
from docsync.cli.versions import app as versions_app
from docsync.core.api import APIError, DocsAPIClient
from docsync.core.changelogs import CHANGELOGS_COMMAND, sync_changelogs
from docsync.core.config import API_KEY_ENV, CLI_NAME
from docsync.core.prompts import TerminalAnswerSource
from docsync.core.utils import setup_logging
from docsync.core.workflow import WorkflowEnvironment, WorkflowSetupCancelled, create_workflow

# Load environment variables
load_dotenv()

app = typer.Typer(
    invoke_without_command=True,
    no_args_is_help=True,
    help="docsync CLI - sync changelogs and versions with your documentation host",
)
app.add_typer(versions_app, name="versions")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"docsync CLI version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """docsync CLI - documentation sync."""
    setup_logging()


@app.command()
def changelogs(
    folder: Optional[str] = typer.Argument(None, help="Folder of Markdown files to sync"),
    key: Optional[str] = typer.Option(None, "--key", envvar=API_KEY_ENV, help="Project API key"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Runs the command without creating/updating any changelogs. Useful for debugging.",
    ),
    github: bool = typer.Option(
        False, "--github", help="Create a new GitHub Actions workflow for this command."
    ),
):
    """Sync a folder of Markdown files to your project as changelog posts.

    Example:
        docsync changelogs docs/changelog --key <key>
        docsync changelogs docs/changelog --dry-run
    """
    try:
        if not key:
            raise ValueError("No project API key provided. Please use `--key`.")
        if not folder:
            raise ValueError(
                f"No folder provided. Usage `{CLI_NAME} {CHANGELOGS_COMMAND.usage}`."
            )

        with DocsAPIClient(key) as client:
            msg = typer.style(sync_changelogs(client, folder, dry_run), fg=typer.colors.GREEN)

        if CHANGELOGS_COMMAND.supports_workflow:
            options = {"folder": folder, "key": key, "dry-run": dry_run, "github": github}
            env = WorkflowEnvironment.from_env(TerminalAnswerSource())
            msg = create_workflow(msg, CHANGELOGS_COMMAND, options, env)
        typer.echo(msg)

    except (APIError, ValueError, WorkflowSetupCancelled) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Unexpected error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
