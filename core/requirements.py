"""Passes that loosen or drop the version requirement of one dependency."""

import logging
from collections.abc import Collection, Iterator

from .declarations import (
    GEMFILE_DECLARATION_METHODS,
    GEMSPEC_DECLARATION_METHODS,
    UNSAFE_ARGUMENT_KINDS,
    declares_dependency,
    has_unsafe_argument,
    requirement_arguments,
)
from .models import Dependency, Edit, Span
from .rewrite import RewritePass
from .syntax import NodeKind, SyntaxAdapter, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)


def updated_requirement_version(dependency: Dependency) -> str:
    """Lower bound to use for the permissive requirement.

    Git-pinned dependencies carry a commit SHA rather than a version, and
    dependencies without a version have nothing to anchor on; both get ``0``.
    """
    if dependency.version is None or dependency.is_git_sha:
        return "0"
    return dependency.version


class _RequirementPass(RewritePass):
    declaration_methods: Collection[str] = ()

    def __init__(
        self,
        dependency_name: str,
        unsafe_kinds: Collection[NodeKind] = UNSAFE_ARGUMENT_KINDS,
        adapter: SyntaxAdapter | None = None,
    ):
        super().__init__(adapter=adapter)
        self.dependency_name = dependency_name
        self.unsafe_kinds = frozenset(unsafe_kinds)

    def edits_for(self, tree: SyntaxTree) -> Iterator[Edit]:
        for node in tree.walk():
            if node.kind is NodeKind.CALL:
                edit = self.on_call(node)
                if edit is not None:
                    yield edit

    def on_call(self, node: SyntaxNode) -> Edit | None:
        if not declares_dependency(node, self.declaration_methods, self.dependency_name):
            return None

        requirements = requirement_arguments(node)
        if not requirements:
            return None
        if has_unsafe_argument(requirements, self.unsafe_kinds):
            logger.debug(
                "Skipping %s declaration of %s on line %d: requirement is not a literal",
                node.name, self.dependency_name, node.line,
            )
            return None

        return self.edit_for(node, requirements)

    def edit_for(self, node: SyntaxNode, requirements: list[SyntaxNode]) -> Edit:
        raise NotImplementedError


class ManifestRequirementReplacer(_RequirementPass):
    """Replace a Gemfile requirement with ``'>= <version>'``.

    ``gem "foo", "~> 1.2.0", require: false`` becomes
    ``gem "foo", '>= 1.5.0', require: false``.
    """

    declaration_methods = GEMFILE_DECLARATION_METHODS

    def __init__(self, dependency_name: str, updated_version: str, **kwargs):
        super().__init__(dependency_name, **kwargs)
        self.updated_version = updated_version

    def edit_for(self, node: SyntaxNode, requirements: list[SyntaxNode]) -> Edit:
        span = requirements[0].span.join(requirements[-1].span)
        return Edit.replace(span, f"'>= {self.updated_version}'")


class SpecificationRequirementRemover(_RequirementPass):
    """Strip the requirement from a gemspec dependency declaration.

    ``spec.add_dependency "foo", "~> 1.2"`` becomes ``spec.add_dependency "foo"``.
    """

    declaration_methods = GEMSPEC_DECLARATION_METHODS

    def edit_for(self, node: SyntaxNode, requirements: list[SyntaxNode]) -> Edit:
        name_node = node.arguments[0]
        return Edit.remove(Span(name_node.end, requirements[-1].end))
