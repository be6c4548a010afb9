"""File role detection for a set of Bundler dependency files."""

import re
from dataclasses import dataclass, field

from .models import FileRole, ManifestFile

GEMFILE = "Gemfile"
LOCKFILE = "Gemfile.lock"
RUBY_VERSION_FILE = ".ruby-version"

TOP_LEVEL_GEMSPEC = re.compile(r"^[^/]*\.gemspec$")


@dataclass
class ClassifiedFiles:
    """Dependency files grouped by the role they play."""

    gemfile: ManifestFile | None = None
    gemspec: ManifestFile | None = None
    path_gemspecs: list[ManifestFile] = field(default_factory=list)
    evaled_gemfiles: list[ManifestFile] = field(default_factory=list)
    lockfile: ManifestFile | None = None
    ruby_version_file: ManifestFile | None = None

    def roles(self) -> list[tuple[ManifestFile, FileRole]]:
        """Files paired with their role, in output order."""
        pairs = []
        if self.gemfile:
            pairs.append((self.gemfile, FileRole.PRIMARY_MANIFEST))
        if self.gemspec:
            pairs.append((self.gemspec, FileRole.SPECIFICATION_FILE))
        pairs.extend((f, FileRole.PATH_SPECIFICATION_FILE) for f in self.path_gemspecs)
        pairs.extend((f, FileRole.SECONDARY_MANIFEST_FRAGMENT) for f in self.evaled_gemfiles)
        if self.lockfile:
            pairs.append((self.lockfile, FileRole.LOCK_FILE))
        if self.ruby_version_file:
            pairs.append((self.ruby_version_file, FileRole.PINNED_VERSION_FILE))
        return pairs


def _is_evaled_gemfile(file: ManifestFile) -> bool:
    if file.name == GEMFILE:
        return False
    return not file.name.endswith((".gemspec", ".lock", RUBY_VERSION_FILE))


def classify(files: list[ManifestFile]) -> ClassifiedFiles:
    """Partition dependency files by role.

    Args:
        files: The dependency files of one project

    Returns:
        ClassifiedFiles with each file assigned to exactly one role
    """
    gemspec = next((f for f in files if TOP_LEVEL_GEMSPEC.match(f.name)), None)

    return ClassifiedFiles(
        gemfile=next((f for f in files if f.name == GEMFILE), None),
        gemspec=gemspec,
        path_gemspecs=[
            f for f in files if f.name.endswith(".gemspec") and f is not gemspec
        ],
        evaled_gemfiles=[f for f in files if _is_evaled_gemfile(f)],
        lockfile=next((f for f in files if f.name == LOCKFILE), None),
        ruby_version_file=next((f for f in files if f.name == RUBY_VERSION_FILE), None),
    )


def identify_role(file: ManifestFile, files: list[ManifestFile] | None = None) -> FileRole | None:
    """Detect the role of one file, in the context of the files around it.

    The top-level gemspec role depends on the other files present, so pass the
    whole set when there is one.

    Returns:
        The file's role, or None for files that play no part (a second
        Gemfile.lock in a subdirectory, for instance)
    """
    for candidate, role in classify(files if files is not None else [file]).roles():
        if candidate is file:
            return role
    return None
