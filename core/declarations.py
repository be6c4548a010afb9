"""Locating dependency declarations in a syntax tree."""

from collections.abc import Collection

from .models import Edit, Span
from .syntax import LITERAL_NAME_KINDS, NodeKind, SyntaxNode

# Requirement arguments of these kinds can't be statically resolved, so any
# declaration that uses one is left untouched.
UNSAFE_ARGUMENT_KINDS = frozenset({
    NodeKind.CALL,
    NodeKind.VARIABLE,
    NodeKind.INTERPOLATED_STRING,
})

OPTION_KINDS = frozenset({NodeKind.HASH, NodeKind.PAIR})
NON_REQUIREMENT_KINDS = OPTION_KINDS | {NodeKind.BLOCK_ARGUMENT}

GEMFILE_DECLARATION_METHODS = frozenset({"gem"})
GEMSPEC_DECLARATION_METHODS = frozenset({
    "add_dependency",
    "add_runtime_dependency",
    "add_development_dependency",
})


def declares_dependency(node: SyntaxNode, methods: Collection[str], dependency_name: str) -> bool:
    """Whether a call node declares ``dependency_name`` via one of ``methods``."""
    if node.kind is not NodeKind.CALL or node.name not in methods:
        return False
    if not node.arguments:
        return False

    first = node.arguments[0]
    return first.kind in LITERAL_NAME_KINDS and first.value == dependency_name


def requirement_arguments(node: SyntaxNode) -> list[SyntaxNode]:
    """Positional arguments after the dependency name, options and blocks excluded."""
    return [arg for arg in node.arguments[1:] if arg.kind not in NON_REQUIREMENT_KINDS]


def option_pairs(node: SyntaxNode) -> list[SyntaxNode]:
    """Key/value option pairs given to a declaration, bare or braced."""
    pairs = []
    for arg in node.arguments[1:]:
        if arg.kind is NodeKind.PAIR:
            pairs.append(arg)
        elif arg.kind is NodeKind.HASH:
            pairs.extend(child for child in arg.children if child.kind is NodeKind.PAIR)
    return pairs


def has_unsafe_argument(
    nodes: Collection[SyntaxNode], unsafe_kinds: Collection[NodeKind] = UNSAFE_ARGUMENT_KINDS
) -> bool:
    return any(node.kind in unsafe_kinds for node in nodes)


def removal_edits(
    buffer: bytes,
    siblings: list[SyntaxNode],
    removed: list[bool],
    comments: Collection[SyntaxNode] = (),
) -> list[Edit]:
    """Edits that delete the flagged siblings together with their separators.

    Each run of adjacent removed siblings is deleted in one go. A run followed
    by a kept sibling takes the comma after it; a trailing run takes the comma
    before it. Comments in between siblings are kept: the run is cut around
    them and the line break after each comment is preserved.
    """
    edits = []
    index = 0
    while index < len(siblings):
        if not removed[index]:
            index += 1
            continue

        last = index
        while last + 1 < len(siblings) and removed[last + 1]:
            last += 1

        if last + 1 < len(siblings):
            span = Span(siblings[index].start, siblings[last + 1].start)
            first, tail = "", None
        elif index > 0:
            span = Span(siblings[index - 1].end, siblings[last].end)
            first, tail = " ", ""
        else:
            span = Span(siblings[index].start, siblings[last].end)
            first, tail = "", ""

        kept = [
            comment for comment in comments
            if span.start <= comment.start and comment.end <= span.end
            and not any(s.start <= comment.start < s.end for s in siblings)
        ]
        edits.extend(_cut_around(buffer, span, sorted(kept, key=lambda c: c.start), first, tail))
        index = last + 1
    return edits


def _cut_around(
    buffer: bytes, span: Span, comments: list[SyntaxNode], first: str, tail: str | None
) -> list[Edit]:
    if not comments:
        return [Edit.remove(span)]

    edits = []
    start = span.start
    gap = buffer[start:comments[0].start]
    if first and b"\n" in gap:
        first = "\n" + _line_indent(buffer, comments[0].start)
    edits.append(Edit.replace(Span(start, comments[0].start), first))

    for comment, following in zip(comments, comments[1:]):
        edits.append(Edit.replace(
            Span(comment.end, following.start), "\n" + _line_indent(buffer, following.start)
        ))

    end = span.end
    if tail is None or buffer[end:end + 1] not in (b"", b"\n", b"\r"):
        tail = "\n" + _line_indent(buffer, end)
    edits.append(Edit.replace(Span(comments[-1].end, end), tail))
    return [edit for edit in edits if edit.span.start < edit.span.end or edit.replacement]


def _line_indent(buffer: bytes, position: int) -> str:
    line_start = buffer.rfind(b"\n", 0, position) + 1
    line = buffer[line_start:position]
    return line[:len(line) - len(line.lstrip(b" \t"))].decode("utf-8")
