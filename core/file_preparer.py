"""Prepare Bundler dependency files for an update check."""

import logging

from .detect import ClassifiedFiles, classify
from .git_source import GitPinReplacer, GitSourceRemover
from .models import Dependency, ManifestFile
from .requirements import (
    ManifestRequirementReplacer,
    SpecificationRequirementRemover,
    updated_requirement_version,
)
from .sanitize import DEFAULT_PLACEHOLDER_VERSION, sanitize_specification
from .syntax import get_adapter

logger = logging.getLogger(__name__)


class FilePreparer:
    """Rewrite a set of dependency files for use by an update checker.

    In particular, it:
    - replaces the version requirement on the dependency being updated with a
      permissive one (Gemfile and evaled Gemfiles)
    - removes the requirement from the gemspec declaration
    - sanitizes gemspecs to remove file requires and VERSION constants, since
      only the dependency files are available, not the whole repo
    - optionally strips or replaces the dependency's git source

    The lockfile and .ruby-version file are passed through untouched.
    """

    def __init__(
        self,
        dependency_files: list[ManifestFile],
        dependency: Dependency,
        remove_git_source: bool = False,
        replacement_git_pin: str | None = None,
        grammar: str = "ruby",
        placeholder_version: str = DEFAULT_PLACEHOLDER_VERSION,
    ):
        self.dependency_files = list(dependency_files)
        self.dependency = dependency
        self.remove_git_source = remove_git_source
        self.replacement_git_pin = replacement_git_pin
        self.placeholder_version = placeholder_version
        self.adapter = get_adapter(grammar)

    @property
    def replace_git_pin(self) -> bool:
        return self.replacement_git_pin is not None

    def classified_files(self) -> ClassifiedFiles:
        return classify(self.dependency_files)

    def prepared_dependency_files(self) -> list[ManifestFile]:
        """Return the prepared files: Gemfile, gemspec, path gemspecs, evaled
        Gemfiles, lockfile and .ruby-version, skipping any that are absent."""
        files = self.classified_files()
        prepared = []

        if files.gemfile:
            prepared.append(
                files.gemfile.with_content(self._gemfile_content_for_update_check(files.gemfile))
            )

        if files.gemspec:
            prepared.append(
                files.gemspec.with_content(self._gemspec_content_for_update_check(files.gemspec))
            )

        for file in files.path_gemspecs:
            prepared.append(file.with_content(self._sanitize(file.content)))

        for file in files.evaled_gemfiles:
            prepared.append(file.with_content(self._gemfile_content_for_update_check(file)))

        # No editing required for lockfile or Ruby version file
        prepared.extend(
            f.with_content(f.content) for f in (files.lockfile, files.ruby_version_file) if f
        )

        logger.info(
            "Prepared %d file(s) for %s update check",
            len(prepared), self.dependency.name,
        )
        return prepared

    def _gemfile_content_for_update_check(self, file: ManifestFile) -> str:
        content = ManifestRequirementReplacer(
            self.dependency.name,
            updated_requirement_version(self.dependency),
            adapter=self.adapter,
        ).rewrite(file.content, filename=file.name)

        if self.remove_git_source:
            content = GitSourceRemover(
                self.dependency.name, adapter=self.adapter
            ).rewrite(content, filename=file.name)

        if self.replace_git_pin:
            content = GitPinReplacer(
                self.dependency.name, self.replacement_git_pin, adapter=self.adapter
            ).rewrite(content, filename=file.name)

        return content

    def _gemspec_content_for_update_check(self, file: ManifestFile) -> str:
        content = SpecificationRequirementRemover(
            self.dependency.name, adapter=self.adapter
        ).rewrite(file.content, filename=file.name)
        return self._sanitize(content)

    def _sanitize(self, content: str) -> str:
        return sanitize_specification(content, placeholder_version=self.placeholder_version)


def prepare_dependency_files(
    dependency_files: list[ManifestFile],
    dependency: Dependency,
    **options,
) -> list[ManifestFile]:
    """Prepare dependency files for an update check.

    Args:
        dependency_files: The project's dependency files
        dependency: The dependency being checked
        **options: Passed through to FilePreparer

    Returns:
        Prepared files, in role order
    """
    return FilePreparer(dependency_files, dependency, **options).prepared_dependency_files()
