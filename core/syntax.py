"""Grammar-independent syntax tree and the adapter registry.

Every rewrite pass is written against the types in this module. Supporting a
new manifest grammar means providing a ``SyntaxAdapter`` that turns source
text into ``SyntaxNode`` trees and registering it with ``register_adapter``.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from .errors import UnsupportedGrammarError
from .models import Span


class NodeKind(Enum):
    """Grammar-independent node categories the passes care about."""

    PROGRAM = "program"
    CALL = "call"
    STRING = "string"
    INTERPOLATED_STRING = "interpolated_string"
    SYMBOL = "symbol"
    HASH = "hash"
    PAIR = "pair"
    BLOCK_ARGUMENT = "block_argument"
    ARRAY = "array"
    VARIABLE = "variable"
    CONSTANT = "constant"
    LITERAL = "literal"
    COMMENT = "comment"
    OTHER = "other"


LITERAL_NAME_KINDS = frozenset({NodeKind.STRING, NodeKind.SYMBOL})


@dataclass(frozen=True)
class SyntaxNode:
    """A parsed construct and the byte span it came from.

    ``arguments`` is only populated for calls. ``name`` holds a call's method
    name or a pair's key; ``value`` holds the content of string and symbol
    literals.
    """

    kind: NodeKind
    span: Span
    line: int
    grammar_type: str
    children: tuple["SyntaxNode", ...] = ()
    arguments: tuple["SyntaxNode", ...] = ()
    name: str | None = None
    value: str | None = None

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    def walk(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all of its descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class SyntaxTree:
    """The root of a parsed file together with the text it was parsed from."""

    root: SyntaxNode
    source: str
    buffer: bytes

    def walk(self) -> Iterator[SyntaxNode]:
        return self.root.walk()

    def text(self, node: SyntaxNode) -> str:
        return self.buffer[node.start:node.end].decode("utf-8")


class SyntaxAdapter:
    """Parses raw text of one grammar into a ``SyntaxTree``."""

    grammar = ""

    def parse(self, text: str, filename: str | None = None) -> SyntaxTree:
        raise NotImplementedError


def _ruby_adapter() -> SyntaxAdapter:
    from .parse_ruby import RubyAdapter

    return RubyAdapter()


_ADAPTERS: dict[str, Callable[[], SyntaxAdapter]] = {"ruby": _ruby_adapter}
_INSTANCES: dict[str, SyntaxAdapter] = {}


def register_adapter(grammar: str, factory: Callable[[], SyntaxAdapter]) -> None:
    """Register a syntax adapter factory under a grammar name."""
    _ADAPTERS[grammar] = factory
    _INSTANCES.pop(grammar, None)


def available_grammars() -> list[str]:
    return sorted(_ADAPTERS)


def get_adapter(grammar: str) -> SyntaxAdapter:
    """Return the (shared) adapter for a grammar.

    Raises:
        UnsupportedGrammarError: if no adapter is registered for ``grammar``.
    """
    if grammar not in _ADAPTERS:
        raise UnsupportedGrammarError(
            f"Unsupported grammar: {grammar}. "
            f"Available: {', '.join(available_grammars()) or 'none'}"
        )
    if grammar not in _INSTANCES:
        _INSTANCES[grammar] = _ADAPTERS[grammar]()
    return _INSTANCES[grammar]
