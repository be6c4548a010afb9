"""Core data models for DepPrep."""

import re
from dataclasses import dataclass, field, replace
from enum import Enum

GIT_SHA_PATTERN = re.compile(r"^[0-9a-f]{40}$")


@dataclass(frozen=True)
class ManifestFile:
    """A single dependency file: Gemfile, gemspec, lockfile, etc."""

    name: str
    content: str
    directory: str = "/"

    def with_content(self, content: str) -> "ManifestFile":
        """Return a copy of this file carrying new content."""
        return replace(self, content=content)


@dataclass(frozen=True)
class Dependency:
    """The dependency being checked for updates."""

    name: str
    version: str | None = None  # may be a git commit SHA
    requirements: tuple[dict, ...] = field(default_factory=tuple)

    @property
    def is_git_sha(self) -> bool:
        return bool(self.version and GIT_SHA_PATTERN.match(self.version))


@dataclass(frozen=True)
class Span:
    """A half-open byte range in an unmodified source buffer."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span: {self.start}..{self.end}")

    def join(self, other: "Span") -> "Span":
        """Smallest span covering both this span and ``other``."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Edit:
    """One planned text change against the original buffer."""

    span: Span
    replacement: str = ""

    @classmethod
    def replace(cls, span: Span, text: str) -> "Edit":
        return cls(span=span, replacement=text)

    @classmethod
    def remove(cls, span: Span) -> "Edit":
        return cls(span=span, replacement="")


class FileRole(Enum):
    """What part a dependency file plays in a Bundler project."""

    PRIMARY_MANIFEST = "primary_manifest"  # Gemfile
    SPECIFICATION_FILE = "specification_file"  # top-level *.gemspec
    PATH_SPECIFICATION_FILE = "path_specification_file"
    SECONDARY_MANIFEST_FRAGMENT = "secondary_manifest_fragment"  # eval_gemfile
    LOCK_FILE = "lock_file"
    PINNED_VERSION_FILE = "pinned_version_file"  # .ruby-version
