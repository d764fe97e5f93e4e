"""Data types shared by docsync commands."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

ArgType = Literal["string", "boolean"]


class ArgSpec(BaseModel):
    """A command-line argument accepted by a command.

    Attributes:
        name: Flag name as typed on the command line (without leading dashes)
        type: Value kind; boolean flags are emitted bare
        positional: True for the command's default (positional) argument
        description: Help text
    """

    name: str = Field(..., min_length=1)
    type: ArgType = "string"
    positional: bool = False
    description: Optional[str] = None


class CommandSpec(BaseModel):
    """Static description of a command, used to reconstruct its invocation."""

    name: str = Field(..., min_length=1)
    usage: str
    args: List[ArgSpec] = Field(default_factory=list)
    supports_workflow: bool = False

    @property
    def requires_key(self) -> bool:
        """Whether the command authenticates with a project API key."""
        return any(arg.name == "key" for arg in self.args)


class RepoContext(BaseModel):
    """Facts derived from the current working tree.

    Computed once per workflow run and never persisted.
    """

    is_repository: bool = False
    has_github_remote: bool = False
    has_non_github_remote: bool = False
    default_branch: Optional[str] = None
    repo_root: Optional[str] = None


class Version(BaseModel):
    """Project version record as exchanged with the documentation API."""

    version: str
    codename: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    is_stable: Optional[bool] = None
    is_beta: Optional[bool] = None
    is_hidden: Optional[bool] = None
    is_deprecated: Optional[bool] = None

    model_config = {"populate_by_name": True}

    @field_validator("version")
    @classmethod
    def trim_version(cls, v: str) -> str:
        """Trim whitespace from version."""
        return v.strip()

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the API, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ChangelogDocument(BaseModel):
    """A Markdown changelog file read from disk.

    Attributes:
        path: Path the document was read from
        slug: Remote identifier, from front matter or the file name
        body: Markdown content without front matter
        frontmatter: Parsed front matter attributes
        hash: SHA-1 of the raw file, used to skip unchanged uploads
    """

    path: str
    slug: str
    body: str
    frontmatter: Dict[str, Any] = Field(default_factory=dict)
    hash: str
