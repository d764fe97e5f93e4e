"""Post-command flow that offers to create a GitHub Actions workflow.

After a workflow-enabled command succeeds inside a GitHub repository, the
user is offered a workflow file that re-runs the same command on every
push to a branch of their choice. Declining is remembered per repository
and docsync major version so the offer is not repeated.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import typer

from docsync import __version__
from docsync.core.ci import is_ci
from docsync.core.config import CLI_NAME, SKIP_WORKFLOW_SETUP_ENV, env_flag
from docsync.core.decisions import DecisionStore, get_decision_key
from docsync.core.git import GitInspector
from docsync.core.models import CommandSpec, RepoContext
from docsync.core.prompts import AnswerSource, PromptStep, run_prompts
from docsync.core.utils import get_major_version
from docsync.core.workflow.command_string import (
    GITHUB_SECRET_NAME,
    GITHUB_WORKFLOW_DIR,
    WORKFLOW_ARG_NAME,
    build_command_string,
    clean_file_name,
    get_workflow_file_name,
    redact_key,
)
from docsync.core.workflow.template import WORKFLOW_TEMPLATE, render

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"

SECRETS_DOCS_URL = (
    "https://docs.github.com/actions/security-guides/"
    "encrypted-secrets#creating-encrypted-secrets-for-a-repository"
)


class WorkflowSetupCancelled(Exception):
    """The user declined to create a workflow file."""

    def __init__(self) -> None:
        super().__init__(
            "GitHub Actions workflow creation cancelled. If you ever change your mind, "
            f"you can run this command again with the `--{WORKFLOW_ARG_NAME}` flag."
        )


@dataclass
class WorkflowEnvironment:
    """Collaborators of the workflow setup flow.

    Attributes:
        git: Inspector for the repository the command ran in
        store: Persistent record of declined setups
        answers: Where prompt answers come from
        is_ci: Detector for CI runners
        version: Current docsync version
        skip_in_tests: Suppress the flow unless it is forced
        cwd: Directory used for relative paths outside a repository
    """

    git: GitInspector
    store: DecisionStore
    answers: AnswerSource
    is_ci: Callable[[], bool] = is_ci
    version: str = __version__
    skip_in_tests: bool = False
    cwd: Optional[Path] = None

    @classmethod
    def from_env(cls, answers: AnswerSource) -> "WorkflowEnvironment":
        """Build the process-wide environment at startup."""
        return cls(
            git=GitInspector(),
            store=DecisionStore.default(),
            answers=answers,
            skip_in_tests=env_flag(SKIP_WORKFLOW_SETUP_ENV),
        )

    @property
    def major_version(self) -> int:
        return get_major_version(self.version)


def _should_skip(
    repo: RepoContext, declined_version: Optional[int], env: WorkflowEnvironment
) -> bool:
    if not repo.is_repository:
        logger.debug("not a git repository")
        return True
    if env.is_ci():
        logger.debug("running in a CI environment")
        return True
    if declined_version == env.major_version:
        logger.debug("workflow setup previously declined for this major version")
        return True
    if repo.has_non_github_remote and not repo.has_github_remote:
        logger.debug("repository only has non-GitHub remotes")
        return True
    if env.skip_in_tests:
        logger.debug(f"{SKIP_WORKFLOW_SETUP_ENV} is set")
        return True
    return False


def _intro_text(command: str, forced: bool) -> str:
    if forced:
        return typer.style("\n🚀 Let's get you set up with GitHub Actions! 🚀\n", bold=True)

    return "\n".join(
        [
            "",
            typer.style(
                "🐙 Looks like you're running this command in a GitHub Repository! 🐙", bold=True
            ),
            "",
            f"🚀 With a few quick clicks, you can run this `{command}` command via GitHub Actions "
            f"({typer.style('https://github.com/features/actions', underline=True)})",
            "",
            "✨ This means it will run automagically with every push to a branch of your choice!",
            "",
        ]
    )


def workflow_prompt_steps(
    command: str, default_branch: Optional[str], base_dir: Path
) -> List[PromptStep]:
    """Build the prompt sequence for the workflow setup flow."""

    def validate_file_name(value: Any) -> Any:
        if not value:
            return "An output path must be supplied."
        if (base_dir / get_workflow_file_name(str(value))).exists():
            return "Specified output path already exists."
        return True

    return [
        PromptStep(
            name="should_create",
            kind="confirm",
            message="Would you like to add a GitHub Actions workflow?",
            default=True,
        ),
        PromptStep(
            name="branch",
            kind="text",
            message="What GitHub branch should this workflow run on?",
            default=default_branch or DEFAULT_BRANCH,
            validator=lambda value: bool(value) or "A branch name must be supplied.",
        ),
        PromptStep(
            name="file_path",
            kind="text",
            message="What would you like to name the GitHub Actions workflow file?",
            default=clean_file_name(f"{CLI_NAME}-{command}"),
            validator=validate_file_name,
            formatter=lambda value: get_workflow_file_name(str(value)),
        ),
    ]


def _success_message(file_path: str, key: Optional[str]) -> str:
    lines = [typer.style("\nYour GitHub Actions workflow file has been created! ✨\n", fg="green")]

    if key:
        lines.extend(
            [
                typer.style("Almost done! Just a couple more steps:", bold=True),
                f"1. Push your newly created file ({typer.style(file_path, underline=True)}) "
                "to GitHub 🚀",
                f"2. Create a GitHub secret called {typer.style(GITHUB_SECRET_NAME, bold=True)} "
                f"and populate the value with your project API key ({redact_key(key)}) 🔑",
                "",
                "🔐 Check out GitHub's docs for more info on creating encrypted secrets "
                f"({typer.style(SECRETS_DOCS_URL, underline=True)})",
            ]
        )
    else:
        lines.append(
            f"{typer.style('Almost done!', bold=True)} Push your newly created file "
            f"({typer.style(file_path, underline=True)}) to GitHub and you're all set 🚀"
        )

    lines.append("")
    return "\n".join(lines)


def create_workflow(
    msg: str,
    command: CommandSpec,
    options: Mapping[str, Any],
    env: WorkflowEnvironment,
) -> str:
    """Offer to create a GitHub Actions workflow after a command succeeds.

    Args:
        msg: Output of the command that just ran
        command: Description of that command
        options: Option values the command ran with
        env: Injected collaborators

    Returns:
        `msg` unchanged when the flow is skipped, otherwise a success
        message describing the remaining setup steps

    Raises:
        WorkflowSetupCancelled: If the user declines
        PromptValidationError: If a pre-supplied answer is invalid
        OSError: If the workflow file cannot be written
    """
    logger.debug(f"running workflow setup for {command.name} command")

    forced = bool(options.get(WORKFLOW_ARG_NAME))

    repo = env.git.inspect()
    decision_key = get_decision_key(repo.repo_root)
    declined_version = env.store.get(decision_key)
    logger.debug(f"repo value in decision store: {declined_version}")

    if not forced and _should_skip(repo, declined_version, env):
        logger.debug("not running workflow setup, exiting")
        return msg

    if msg:
        typer.echo(msg)
    typer.echo(_intro_text(command.name, forced))

    base_dir = Path(repo.repo_root) if repo.repo_root else (env.cwd or Path.cwd())

    answers = run_prompts(
        workflow_prompt_steps(command.name, repo.default_branch, base_dir),
        env.answers,
        overrides={"should_create": True if forced else None},
        should_stop=lambda answers: not answers.get("should_create"),
    )

    if not answers.get("should_create"):
        # Don't ask again for this repo and major version
        env.store.set(decision_key, env.major_version)
        raise WorkflowSetupCancelled()

    file_path = answers["file_path"]
    data: Dict[str, str] = {
        "branch": answers["branch"],
        "clean_command": clean_file_name(command.name),
        "command": command.name,
        "command_string": build_command_string(command.name, command.args, options),
        "docsync_version": env.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    logger.debug(f"data for resolver: {data}")

    output = render(WORKFLOW_TEMPLATE, data.__getitem__)

    workflow_dir = base_dir / GITHUB_WORKFLOW_DIR
    if not workflow_dir.exists():
        logger.debug("workflow directory does not exist, creating")
        workflow_dir.mkdir(parents=True, exist_ok=True)

    (base_dir / file_path).write_text(output, encoding="utf-8")
    logger.info(f"Wrote workflow file {base_dir / file_path}")

    key = options.get("key") if command.requires_key else None
    return _success_message(file_path, key)
