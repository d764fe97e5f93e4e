"""Create project versions on the documentation host."""

import logging
from typing import Any, Dict, List, Optional

from docsync.core.api import DocsAPIClient
from docsync.core.config import CLI_NAME
from docsync.core.models import Version
from docsync.core.prompts import AnswerSource, PromptStep, run_prompts
from docsync.core.utils import cast_string_opt_to_bool, coerce_version

logger = logging.getLogger(__name__)


def version_prompt_steps(
    version_list: List[Dict[str, Any]], is_stable: Optional[bool]
) -> List[PromptStep]:
    """Build the prompts collecting the attributes of a new version.

    Args:
        version_list: Existing versions offered as fork sources
        is_stable: Value of --main when given; a stable version skips the
            hidden/deprecated questions
    """
    choices = [str(item["version"]) for item in version_list if item.get("version")]

    def not_stable(answers: Dict[str, Any]) -> bool:
        return not (is_stable or answers.get("is_stable"))

    return [
        PromptStep(
            name="from",
            kind="select",
            message="Which version would you like to fork from?",
            choices=choices,
            default=choices[0] if choices else None,
            when=lambda answers: bool(choices),
        ),
        PromptStep(
            name="is_stable",
            kind="confirm",
            message="Would you like to make this version the main version for this project?",
            default=False,
            when=lambda answers: not is_stable,
        ),
        PromptStep(
            name="is_beta",
            kind="confirm",
            message="Should this version be in beta?",
            default=False,
        ),
        PromptStep(
            name="is_hidden",
            kind="confirm",
            message="Would you like to make this version public?",
            default=True,
            formatter=lambda public: not public,
            when=not_stable,
        ),
        PromptStep(
            name="is_deprecated",
            kind="confirm",
            message="Would you like to deprecate this version?",
            default=False,
            when=lambda answers: not_stable(answers) and not answers.get("is_hidden"),
        ),
    ]


def create_version(
    client: DocsAPIClient,
    answers: AnswerSource,
    version: Optional[str],
    fork: Optional[str] = None,
    codename: Optional[str] = None,
    main: Optional[str] = None,
    beta: Optional[str] = None,
    deprecated: Optional[str] = None,
    hidden: Optional[str] = None,
) -> str:
    """Create a new project version.

    The true/false options are passed as strings, exactly as typed on the
    command line, and pre-answer the matching prompts.

    Returns:
        Success message

    Raises:
        ValueError: If the version or a true/false option is invalid
        APIError: If the API rejects a request
    """
    if not version or coerce_version(version) is None:
        raise ValueError(
            f"Please specify a semantic version. "
            f"See `{CLI_NAME} versions create --help` for help."
        )

    overrides = {
        "is_beta": cast_string_opt_to_bool(beta, "beta"),
        "is_deprecated": cast_string_opt_to_bool(deprecated, "deprecated"),
        "is_hidden": cast_string_opt_to_bool(hidden, "hidden"),
        "is_stable": cast_string_opt_to_bool(main, "main"),
    }

    version_list: List[Dict[str, Any]] = []
    if not fork:
        version_list = client.list_versions()
        logger.debug(f"fetched {len(version_list)} versions to fork from")

    steps = version_prompt_steps(version_list, overrides["is_stable"])
    if fork:
        # A fork given on the command line is not limited to the fetched list
        steps = [step for step in steps if step.name != "from"]

    response = run_prompts(steps, answers, overrides=overrides)
    is_stable_answer = response.get("is_stable", overrides["is_stable"])

    body = Version(
        version=version,
        codename=codename,
        from_=fork or response.get("from"),
        is_stable=is_stable_answer,
        is_beta=response.get("is_beta"),
        is_hidden=response.get("is_hidden"),
        is_deprecated=response.get("is_deprecated"),
    )
    logger.debug(f"creating version: {body.to_payload()}")

    client.create_version(body.to_payload())
    return f"Version {version} created successfully."
