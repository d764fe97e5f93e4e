"""Interactive prompting with pluggable answer sources.

A prompt sequence is a list of PromptStep objects run in order by
run_prompts(). Answers come from an AnswerSource chosen by the caller:
TerminalAnswerSource asks the user on stdin, MappingAnswerSource reads
pre-supplied answers for tests and scripted runs.

Example:
    >>> steps = [PromptStep(name="go", kind="confirm", message="Continue?", default=True)]
    >>> run_prompts(steps, MappingAnswerSource({"go": False}))
    {'go': False}
"""

import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Literal,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

import typer

logger = logging.getLogger(__name__)

PromptKind = Literal["confirm", "text", "select"]

Answers = Dict[str, Any]

# Returns True when the value is acceptable, otherwise an error message
Validator = Callable[[Any], Union[bool, str]]


class PromptValidationError(ValueError):
    """A supplied answer failed validation outside of an interactive session."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


@dataclass
class PromptStep:
    """One question in a prompt sequence.

    Attributes:
        name: Key of the answer in the returned mapping
        kind: confirm (yes/no), text (free input) or select (one of choices)
        message: Question shown to the user
        default: Value used when the user just presses Enter
        choices: Allowed values for select prompts
        validator: Optional check run on the raw answer
        formatter: Optional transformation applied to the accepted answer
        when: Optional predicate over answers so far; False skips the step
    """

    name: str
    kind: PromptKind
    message: str
    default: Any = None
    choices: List[str] = field(default_factory=list)
    validator: Optional[Validator] = None
    formatter: Optional[Callable[[Any], Any]] = None
    when: Optional[Callable[[Answers], bool]] = None

    def check(self, value: Any) -> Optional[str]:
        """Validate a raw answer.

        Returns:
            None when valid, otherwise the error message to show
        """
        if self.kind == "select" and value not in self.choices:
            return f"Please choose one of: {', '.join(self.choices)}"
        if self.validator is None:
            return None
        result = self.validator(value)
        if result is True:
            return None
        return result if isinstance(result, str) and result else "Invalid value."


@runtime_checkable
class AnswerSource(Protocol):
    """Protocol for anything that can answer a prompt step."""

    def ask(self, step: PromptStep) -> Any:
        """Return a valid raw answer for the step."""
        ...


class TerminalAnswerSource:
    """Ask the user on the terminal, re-prompting until the answer is valid."""

    def ask(self, step: PromptStep) -> Any:
        if step.kind == "confirm":
            return typer.confirm(step.message, default=bool(step.default))

        message = step.message
        if step.kind == "select":
            message = f"{step.message} ({', '.join(step.choices)})"

        while True:
            value = typer.prompt(
                message,
                default=step.default if step.default is not None else "",
                show_default=step.default is not None,
            )
            error = step.check(value)
            if error is None:
                return value
            typer.echo(typer.style(error, fg=typer.colors.RED), err=True)


class MappingAnswerSource:
    """Answer prompts from a pre-supplied mapping.

    Steps missing from the mapping take their default. An invalid answer
    raises immediately since nobody can be asked again.
    """

    def __init__(self, answers: Optional[Mapping[str, Any]] = None) -> None:
        self.answers = dict(answers or {})

    def ask(self, step: PromptStep) -> Any:
        value = self.answers.get(step.name, step.default)
        if step.kind == "confirm":
            return bool(value)
        error = step.check(value)
        if error is not None:
            raise PromptValidationError(step.name, error)
        return value


def run_prompts(
    steps: Sequence[PromptStep],
    source: AnswerSource,
    overrides: Optional[Mapping[str, Any]] = None,
    should_stop: Optional[Callable[[Answers], bool]] = None,
) -> Answers:
    """Run a prompt sequence and collect the answers.

    Overrides with a non-None value bypass the answer source. They are
    validated but used as-is, without the step's formatter.

    Args:
        steps: Ordered prompt steps
        source: Where interactive answers come from
        overrides: Optional answers that skip prompting entirely
        should_stop: Optional predicate checked after each answer; when it
            returns True the remaining steps are skipped

    Returns:
        Mapping of step name to answer; skipped steps are absent

    Raises:
        PromptValidationError: If an override or mapped answer is invalid
    """
    answers: Answers = {}
    overrides = overrides or {}

    for step in steps:
        if step.when is not None and not step.when(answers):
            logger.debug(f"Skipping prompt '{step.name}'")
            continue

        override = overrides.get(step.name)
        if override is not None:
            error = None if step.kind == "confirm" else step.check(override)
            if error is not None:
                raise PromptValidationError(step.name, error)
            answers[step.name] = override
        else:
            value = source.ask(step)
            answers[step.name] = step.formatter(value) if step.formatter else value

        if should_stop is not None and should_stop(answers):
            logger.debug(f"Prompt sequence stopped after '{step.name}'")
            break

    return answers
