"""Workflow template and placeholder resolution."""

import logging
from typing import Callable, Dict

import jinja2
from jinja2 import meta

logger = logging.getLogger(__name__)

Resolver = Callable[[str], str]

WORKFLOW_TEMPLATE = """\
# This GitHub Actions workflow was auto-generated by the `docsync` CLI on {{ timestamp }}
name: docsync GitHub Action

on:
  push:
    branches:
      # This workflow will run every time you push code to the following branch: `{{ branch }}`
      # Check out GitHub's docs for more info on configuring this:
      # https://docs.github.com/actions/using-workflows/events-that-trigger-workflows
      - {{ branch }}

jobs:
  docsync-{{ clean_command }}:
    runs-on: ubuntu-latest
    steps:
      - name: Check out repo
        uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: '3.12'

      - name: Install docsync
        run: pip install docsync=={{ docsync_version }}

      - name: Run `{{ command }}` command
        run: docsync {{ command_string }}
"""

_ENV = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def render(template: str, resolve: Resolver) -> str:
    """Render a template, resolving each placeholder through a callback.

    The resolver is called once per distinct placeholder name. Resolved
    values are inserted literally and never expanded again.

    Args:
        template: Template text with `{{ name }}` placeholders
        resolve: Maps a placeholder name to its replacement text

    Returns:
        The rendered text

    Raises:
        KeyError: If the resolver has no value for a placeholder
        jinja2.TemplateError: If the template itself is malformed
    """
    names = meta.find_undeclared_variables(_ENV.parse(template))
    values: Dict[str, str] = {name: resolve(name) for name in sorted(names)}
    logger.debug(f"Resolved template placeholders: {sorted(values)}")
    return _ENV.from_string(template).render(**values)
