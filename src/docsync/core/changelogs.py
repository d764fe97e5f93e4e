"""Sync a folder of Markdown files to the documentation host as changelogs."""

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from docsync.core.api import DocsAPIClient
from docsync.core.models import ArgSpec, ChangelogDocument, CommandSpec

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".markdown")

CHANGELOGS_COMMAND = CommandSpec(
    name="changelogs",
    usage="changelogs <folder> [options]",
    args=[
        ArgSpec(name="key", description="Project API key"),
        ArgSpec(name="folder", positional=True),
        ArgSpec(
            name="dry-run",
            type="boolean",
            description="Runs the command without creating/updating any changelogs.",
        ),
        ArgSpec(
            name="github",
            type="boolean",
            description="Create a new GitHub Actions workflow for this command.",
        ),
    ],
    supports_workflow=True,
)


def find_markdown_files(folder: Union[str, Path]) -> List[str]:
    """Recursively list Markdown files under a folder.

    Files of a directory come before those of its subdirectories.
    """
    entries = sorted(os.scandir(folder), key=lambda entry: entry.name)
    files = [
        entry.path
        for entry in entries
        if entry.is_file() and entry.name.endswith(MARKDOWN_EXTENSIONS)
    ]
    for entry in entries:
        if entry.is_dir():
            files.extend(find_markdown_files(entry.path))
    return files


def split_frontmatter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split YAML front matter from Markdown content.

    Returns:
        Tuple of (front matter attributes, body)
    """
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        return {}, raw

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            data = yaml.safe_load("".join(lines[1:index])) or {}
            if not isinstance(data, dict):
                raise ValueError("Front matter must be a mapping of attributes")
            return data, "".join(lines[index + 1 :]).lstrip("\n")

    return {}, raw


def read_changelog(path: Union[str, Path]) -> ChangelogDocument:
    """Read a Markdown file into a ChangelogDocument."""
    raw = Path(path).read_text(encoding="utf-8")
    frontmatter, body = split_frontmatter(raw)
    # Dates and other YAML scalars must survive JSON encoding
    frontmatter = json.loads(json.dumps(frontmatter, default=str))
    slug = frontmatter.get("slug") or Path(path).stem.lower()
    return ChangelogDocument(
        path=str(path),
        slug=str(slug),
        body=body,
        frontmatter=frontmatter,
        hash=hashlib.sha1(raw.encode("utf-8")).hexdigest(),
    )


def push_changelog(client: DocsAPIClient, path: Union[str, Path], dry_run: bool = False) -> str:
    """Create or update the remote changelog for one file.

    Returns:
        Human-readable description of what happened (or would happen)
    """
    doc = read_changelog(path)
    slug = doc.slug

    if not doc.frontmatter:
        logger.debug(f"No front matter attributes found for {doc.path}, not syncing")
        return f"⏭️  no front matter attributes found for {doc.path}, skipping"

    payload = {"body": doc.body, **doc.frontmatter, "lastUpdatedHash": doc.hash}
    metadata = json.dumps(doc.frontmatter, default=str)

    existing = client.get_changelog(slug)

    if existing is None:
        if dry_run:
            return (
                f"🎭 dry run! This will create '{slug}' with contents from {doc.path} "
                f"with the following metadata: {metadata}"
            )
        created = client.create_changelog({"slug": slug, **payload})
        return (
            f"🌱 successfully created '{created.get('slug', slug)}' "
            f"(ID: {created.get('id')}) with contents from {doc.path}"
        )

    if existing.get("lastUpdatedHash") == doc.hash:
        if dry_run:
            return f"🎭 dry run! `{slug}` will not be updated because there were no changes."
        return f"`{slug}` was not updated because there were no changes."

    if dry_run:
        return (
            f"🎭 dry run! This will update '{slug}' with contents from {doc.path} "
            f"with the following metadata: {metadata}"
        )
    updated = client.update_changelog(slug, payload)
    return f"✏️  successfully updated '{updated.get('slug', slug)}' with contents from {doc.path}"


def sync_changelogs(client: DocsAPIClient, folder: Union[str, Path], dry_run: bool = False) -> str:
    """Push every Markdown file in a folder.

    Raises:
        ValueError: If the folder contains no Markdown files
    """
    files = find_markdown_files(folder)
    logger.debug(f"number of files: {len(files)}")

    if not files:
        raise ValueError(f"We were unable to locate Markdown files in {folder}.")

    return "\n".join(push_changelog(client, path, dry_run) for path in files)
