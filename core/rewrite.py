"""Byte-span rewriting of source text."""

import logging
from collections.abc import Iterable, Iterator

from .errors import OverlappingEditError
from .models import Edit
from .syntax import SyntaxAdapter, SyntaxTree, get_adapter

logger = logging.getLogger(__name__)


def apply_edits(source: str, edits: Iterable[Edit]) -> str:
    """Apply edits to source text in a single pass over the original buffer.

    Spans refer to UTF-8 byte offsets of ``source``. Bytes outside every edit
    span are copied unchanged.

    Args:
        source: The original text
        edits: Edits planned against ``source``; order does not matter

    Returns:
        The rewritten text

    Raises:
        OverlappingEditError: if two edit spans intersect
        ValueError: if an edit span falls outside the buffer
    """
    buffer = source.encode("utf-8")
    ordered = sorted(edits, key=lambda edit: (edit.span.start, edit.span.end))
    if not ordered:
        return source

    pieces: list[bytes] = []
    cursor = 0
    previous: Edit | None = None

    for edit in ordered:
        if edit.span.end > len(buffer):
            raise ValueError(
                f"Edit span {edit.span.start}..{edit.span.end} exceeds source length {len(buffer)}"
            )
        if previous is not None and edit.span.overlaps(previous.span):
            raise OverlappingEditError(
                f"Edit at {edit.span.start}..{edit.span.end} overlaps "
                f"edit at {previous.span.start}..{previous.span.end}"
            )

        pieces.append(buffer[cursor:edit.span.start])
        pieces.append(edit.replacement.encode("utf-8"))
        cursor = edit.span.end
        previous = edit

    pieces.append(buffer[cursor:])
    return b"".join(pieces).decode("utf-8")


class RewritePass:
    """A single parse -> plan edits -> apply step.

    Subclasses implement ``edits_for``. Every call to ``rewrite`` parses the
    text it is given, so passes can be chained on each other's output.
    """

    def __init__(self, adapter: SyntaxAdapter | None = None, grammar: str = "ruby"):
        self.adapter = adapter or get_adapter(grammar)

    def edits_for(self, tree: SyntaxTree) -> Iterator[Edit]:
        raise NotImplementedError

    def rewrite(self, source: str, filename: str | None = None) -> str:
        tree = self.adapter.parse(source, filename=filename)
        edits = list(self.edits_for(tree))
        logger.debug(
            "%s planned %d edit(s) for %s",
            type(self).__name__, len(edits), filename or "<source>",
        )
        return apply_edits(source, edits)
