"""Tests for the GitHub Actions workflow setup flow."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from docsync.core.decisions import DecisionStore, get_decision_key
from docsync.core.git import GitInspector
from docsync.core.models import ArgSpec, CommandSpec, RepoContext
from docsync.core.prompts import AnswerSource, MappingAnswerSource, PromptValidationError
from docsync.core.workflow import WorkflowEnvironment, WorkflowSetupCancelled, create_workflow

API_KEY = "abcd1234efgh5678"

COMMAND = CommandSpec(
    name="openapi",
    usage="openapi <file> [options]",
    args=[
        ArgSpec(name="key"),
        ArgSpec(name="spec", positional=True),
        ArgSpec(name="github", type="boolean"),
    ],
    supports_workflow=True,
)

KEYLESS_COMMAND = CommandSpec(
    name="validate",
    usage="validate <file>",
    args=[ArgSpec(name="spec", positional=True)],
    supports_workflow=True,
)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def store(tmp_path: Path) -> DecisionStore:
    return DecisionStore(tmp_path / "data" / "config.json")


def github_repo(repo_root: Path, **overrides) -> RepoContext:
    values = {
        "is_repository": True,
        "has_github_remote": True,
        "has_non_github_remote": False,
        "default_branch": "develop",
        "repo_root": str(repo_root),
    }
    values.update(overrides)
    return RepoContext(**values)


def make_env(
    repo: RepoContext,
    store: DecisionStore,
    answers: AnswerSource,
    is_ci: bool = False,
    skip_in_tests: bool = False,
    cwd: Path = None,
    version: str = "8.1.0",
) -> WorkflowEnvironment:
    git = Mock(spec=GitInspector)
    git.inspect.return_value = repo
    return WorkflowEnvironment(
        git=git,
        store=store,
        answers=answers,
        is_ci=lambda: is_ci,
        version=version,
        skip_in_tests=skip_in_tests,
        cwd=cwd,
    )


def untouched_answers() -> Mock:
    """An answer source that fails the test if it is ever asked."""
    source = Mock(spec=AnswerSource)
    source.ask.side_effect = AssertionError("prompted unexpectedly")
    return source


def assert_no_side_effects(store: DecisionStore, repo_root: Path) -> None:
    assert not store.path.exists()
    assert not (repo_root / ".github").exists()


OPTIONS = {"key": API_KEY, "spec": "petstore.json"}


def test_skips_outside_repository(store, repo_root):
    """Test the flow is a no-op outside a git repository."""
    repo = RepoContext(is_repository=False)
    env = make_env(repo, store, untouched_answers(), cwd=repo_root)

    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
    assert_no_side_effects(store, repo_root)


def test_skips_in_ci(store, repo_root):
    """Test the flow is a no-op inside a CI runner."""
    env = make_env(github_repo(repo_root), store, untouched_answers(), is_ci=True)

    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
    assert_no_side_effects(store, repo_root)


def test_skips_after_decline_for_same_major_version(store, repo_root):
    """Test a prior decline for this major version suppresses the flow."""
    store.set(get_decision_key(str(repo_root)), 8)
    env = make_env(github_repo(repo_root), store, untouched_answers())

    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
    assert not (repo_root / ".github").exists()


def test_runs_again_after_major_version_bump(store, repo_root):
    """Test a decline recorded for an older major version is ignored."""
    store.set(get_decision_key(str(repo_root)), 7)
    env = make_env(github_repo(repo_root), store, MappingAnswerSource({"should_create": True}))

    create_workflow("synced!", COMMAND, OPTIONS, env)

    assert (repo_root / ".github" / "workflows" / "docsync-openapi.yml").exists()


def test_skips_non_github_remotes(store, repo_root):
    """Test repositories with only non-GitHub remotes are skipped."""
    repo = github_repo(repo_root, has_github_remote=False, has_non_github_remote=True)
    env = make_env(repo, store, untouched_answers())

    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
    assert_no_side_effects(store, repo_root)


def test_runs_with_mixed_remotes(store, repo_root):
    """Test a GitHub remote alongside others still offers the workflow."""
    repo = github_repo(repo_root, has_non_github_remote=True)
    env = make_env(repo, store, MappingAnswerSource())

    create_workflow("synced!", COMMAND, OPTIONS, env)

    assert (repo_root / ".github" / "workflows" / "docsync-openapi.yml").exists()


def test_skips_when_suppressed_for_tests(store, repo_root):
    """Test the test-mode flag suppresses the flow."""
    env = make_env(github_repo(repo_root), store, untouched_answers(), skip_in_tests=True)

    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
    assert_no_side_effects(store, repo_root)


def test_decline_records_decision(store, repo_root):
    """Test declining stores the major version and writes no workflow."""
    env = make_env(
        github_repo(repo_root),
        store,
        MappingAnswerSource({"should_create": False, "file_path": "ignored"}),
    )

    with pytest.raises(WorkflowSetupCancelled, match="--github"):
        create_workflow("synced!", COMMAND, OPTIONS, env)

    assert store.get(get_decision_key(str(repo_root))) == 8
    assert not (repo_root / ".github").exists()


def test_decline_overwrites_previous_decision(store, repo_root):
    """Test declining again replaces the recorded version."""
    key = get_decision_key(str(repo_root))
    store.set(key, 6)
    env = make_env(github_repo(repo_root), store, MappingAnswerSource({"should_create": False}))

    with pytest.raises(WorkflowSetupCancelled):
        create_workflow("synced!", COMMAND, OPTIONS, env)

    assert store.get(key) == 8


def test_creates_workflow_file(store, repo_root, capsys):
    """Test accepting writes the rendered workflow to the normalized path."""
    env = make_env(
        github_repo(repo_root),
        store,
        MappingAnswerSource(
            {"should_create": True, "branch": "develop", "file_path": "My Workflow!"}
        ),
    )

    result = create_workflow("synced!", COMMAND, OPTIONS, env)

    workflow_file = repo_root / ".github" / "workflows" / "my-workflow-.yml"
    content = workflow_file.read_text()
    assert "      - develop\n" in content
    assert "docsync openapi petstore.json --key=${{ secrets.DOCSYNC_API_KEY }}" in content
    assert "pip install docsync==8.1.0" in content
    assert API_KEY not in content

    assert "workflow file has been created" in result
    assert ".github/workflows/my-workflow-.yml" in result
    assert "DOCSYNC_API_KEY" in result
    assert "••••••••••••h5678" in result
    assert API_KEY not in result
    assert not store.path.exists()

    out = capsys.readouterr().out
    assert "synced!" in out
    assert "GitHub Repository" in out


def test_branch_defaults_to_detected_branch(store, repo_root):
    """Test the detected default branch is the branch prompt's default."""
    env = make_env(github_repo(repo_root, default_branch="trunk"), store, MappingAnswerSource())

    create_workflow("synced!", COMMAND, OPTIONS, env)

    content = (repo_root / ".github" / "workflows" / "docsync-openapi.yml").read_text()
    assert "      - trunk\n" in content


def test_branch_falls_back_to_main(store, repo_root):
    """Test an undetected default branch falls back to main."""
    env = make_env(github_repo(repo_root, default_branch=None), store, MappingAnswerSource())

    create_workflow("synced!", COMMAND, OPTIONS, env)

    content = (repo_root / ".github" / "workflows" / "docsync-openapi.yml").read_text()
    assert "      - main\n" in content


def test_existing_file_name_is_rejected(store, repo_root):
    """Test an existing workflow file is never overwritten."""
    workflow_dir = repo_root / ".github" / "workflows"
    workflow_dir.mkdir(parents=True)
    existing = workflow_dir / "docsync-openapi.yml"
    existing.write_text("original")
    env = make_env(github_repo(repo_root), store, MappingAnswerSource())

    with pytest.raises(PromptValidationError, match="already exists"):
        create_workflow("synced!", COMMAND, OPTIONS, env)

    assert existing.read_text() == "original"


def test_empty_file_name_is_rejected(store, repo_root):
    """Test an empty output name is an input error."""
    env = make_env(github_repo(repo_root), store, MappingAnswerSource({"file_path": ""}))

    with pytest.raises(PromptValidationError, match="must be supplied"):
        create_workflow("synced!", COMMAND, OPTIONS, env)


def test_forced_outside_repository(store, tmp_path, capsys):
    """Test --github runs the flow anywhere and skips the confirmation."""
    source = MappingAnswerSource({"should_create": False})
    env = make_env(RepoContext(), store, source, is_ci=True, cwd=tmp_path)

    result = create_workflow("synced!", COMMAND, {**OPTIONS, "github": True}, env)

    content = (tmp_path / ".github" / "workflows" / "docsync-openapi.yml").read_text()
    assert "--github" not in content
    assert "      - main\n" in content
    assert "created" in result
    assert "Let's get you set up with GitHub Actions" in capsys.readouterr().out


def test_forced_ignores_prior_decline(store, repo_root):
    """Test --github bypasses a recorded decline."""
    store.set(get_decision_key(str(repo_root)), 8)
    env = make_env(github_repo(repo_root), store, MappingAnswerSource())

    create_workflow("synced!", COMMAND, {**OPTIONS, "github": True}, env)

    assert (repo_root / ".github" / "workflows" / "docsync-openapi.yml").exists()


def test_success_message_without_key(store, repo_root):
    """Test commands without a key get no secret instructions."""
    env = make_env(github_repo(repo_root), store, MappingAnswerSource())

    result = create_workflow("ok", KEYLESS_COMMAND, {"spec": "petstore.json"}, env)

    assert "you're all set" in result
    assert "DOCSYNC_API_KEY" not in result
    content = (repo_root / ".github" / "workflows" / "docsync-validate.yml").read_text()
    assert "docsync validate petstore.json" in content


def test_filesystem_errors_propagate(store, repo_root):
    """Test a failure creating the workflow directory is not swallowed."""
    (repo_root / ".github").write_text("not a directory")
    env = make_env(github_repo(repo_root), store, MappingAnswerSource())

    with pytest.raises(OSError):
        create_workflow("synced!", COMMAND, OPTIONS, env)


def test_prerelease_version_decline_and_skip(store, repo_root):
    """Test a pre-release docsync version still records and honors declines."""
    key = get_decision_key(str(repo_root))
    env = make_env(
        github_repo(repo_root),
        store,
        MappingAnswerSource({"should_create": False}),
        version="1.0.0rc1",
    )

    with pytest.raises(WorkflowSetupCancelled):
        create_workflow("synced!", COMMAND, OPTIONS, env)

    assert store.get(key) == 1

    env = make_env(github_repo(repo_root), store, untouched_answers(), version="1.0.0rc1")
    assert create_workflow("synced!", COMMAND, OPTIONS, env) == "synced!"
