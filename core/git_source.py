"""Passes that strip or replace the git source of a Gemfile declaration."""

import logging
from collections.abc import Iterator

from .declarations import (
    GEMFILE_DECLARATION_METHODS,
    declares_dependency,
    option_pairs,
    removal_edits,
)
from .models import Edit
from .rewrite import RewritePass
from .syntax import NodeKind, SyntaxAdapter, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

GIT_SOURCE_KEYS = frozenset({"git", "github", "branch", "ref", "tag"})
GIT_PIN_KEYS = frozenset({"ref", "tag"})


class GitSourceRemover(RewritePass):
    """Remove git/github/branch/ref/tag options from the targeted gem.

    ``gem "foo", "~> 1.0", git: "https://github.com/x/foo", branch: "main"``
    becomes ``gem "foo", "~> 1.0"``.
    """

    def __init__(self, dependency_name: str, adapter: SyntaxAdapter | None = None):
        super().__init__(adapter=adapter)
        self.dependency_name = dependency_name

    def edits_for(self, tree: SyntaxTree) -> Iterator[Edit]:
        for node in tree.walk():
            if node.kind is NodeKind.CALL and declares_dependency(
                node, GEMFILE_DECLARATION_METHODS, self.dependency_name
            ):
                yield from self._edits_for_declaration(tree, node)

    def _edits_for_declaration(self, tree: SyntaxTree, node: SyntaxNode) -> Iterator[Edit]:
        arguments = list(node.arguments)
        comments = [child for child in node.walk() if child.kind is NodeKind.COMMENT]
        removed = [_is_git_pair(arg) for arg in arguments]
        inner_edits = []

        for index, arg in enumerate(arguments):
            if arg.kind is not NodeKind.HASH:
                continue
            pairs = [child for child in arg.children if child.kind is NodeKind.PAIR]
            flags = [_is_git_pair(pair) for pair in pairs]
            if pairs and all(flags):
                removed[index] = True
            elif any(flags):
                inner_edits.extend(removal_edits(tree.buffer, pairs, flags, comments))

        if not any(removed) and not inner_edits:
            return

        logger.debug("Removing git source of %s on line %d", self.dependency_name, node.line)
        yield from removal_edits(tree.buffer, arguments, removed, comments)
        yield from inner_edits


class GitPinReplacer(RewritePass):
    """Point the ``ref:``/``tag:`` option of the targeted gem at a new pin."""

    def __init__(self, dependency_name: str, new_pin: str, adapter: SyntaxAdapter | None = None):
        super().__init__(adapter=adapter)
        self.dependency_name = dependency_name
        self.new_pin = new_pin

    def edits_for(self, tree: SyntaxTree) -> Iterator[Edit]:
        for node in tree.walk():
            if node.kind is not NodeKind.CALL:
                continue
            if not declares_dependency(node, GEMFILE_DECLARATION_METHODS, self.dependency_name):
                continue
            for pair in option_pairs(node):
                if pair.name not in GIT_PIN_KEYS:
                    continue
                value = pair.children[-1]
                if value.kind is not NodeKind.STRING:
                    continue
                yield Edit.replace(value.span, self._quoted(tree.text(value)))

    def _quoted(self, original: str) -> str:
        quote = original[0] if original[:1] in ("'", '"') else '"'
        return f"{quote}{_escaped(self.new_pin, quote)}{quote}"


def _is_git_pair(node: SyntaxNode) -> bool:
    return node.kind is NodeKind.PAIR and node.name in GIT_SOURCE_KEYS


def _escaped(pin: str, quote: str) -> str:
    # "#" would start an interpolation inside double quotes
    specials = '\\"#' if quote == '"' else "\\'"
    return "".join("\\" + char if char in specials else char for char in pin)
