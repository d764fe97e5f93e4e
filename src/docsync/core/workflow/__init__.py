"""GitHub Actions workflow setup for docsync commands.

Main components:
- orchestrator: create_workflow() post-command flow and its environment
- command_string: command reconstruction and workflow file naming
- template: base workflow template and placeholder resolution
"""

from docsync.core.workflow.command_string import (
    build_command_string,
    clean_file_name,
    get_workflow_file_name,
    redact_key,
)
from docsync.core.workflow.orchestrator import (
    WorkflowEnvironment,
    WorkflowSetupCancelled,
    create_workflow,
)
from docsync.core.workflow.template import WORKFLOW_TEMPLATE, render

__all__ = [
    "create_workflow",
    "WorkflowEnvironment",
    "WorkflowSetupCancelled",
    "build_command_string",
    "clean_file_name",
    "get_workflow_file_name",
    "redact_key",
    "render",
    "WORKFLOW_TEMPLATE",
]
