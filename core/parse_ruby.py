"""Ruby (Gemfile / gemspec) parsing on top of tree-sitter."""

import logging

from tree_sitter_language_pack import get_parser

from .errors import ParseError
from .models import Span
from .syntax import NodeKind, SyntaxAdapter, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

# tree-sitter-ruby node types -> grammar independent kinds
NODE_KINDS = {
    "program": NodeKind.PROGRAM,
    "call": NodeKind.CALL,
    "element_reference": NodeKind.CALL,
    "binary": NodeKind.CALL,
    "unary": NodeKind.CALL,
    "string": NodeKind.STRING,
    "simple_symbol": NodeKind.SYMBOL,
    "delimited_symbol": NodeKind.SYMBOL,
    "hash_key_symbol": NodeKind.SYMBOL,
    "hash": NodeKind.HASH,
    "hash_splat_argument": NodeKind.HASH,
    "pair": NodeKind.PAIR,
    "block_argument": NodeKind.BLOCK_ARGUMENT,
    "array": NodeKind.ARRAY,
    "string_array": NodeKind.ARRAY,
    "symbol_array": NodeKind.ARRAY,
    "identifier": NodeKind.VARIABLE,
    "instance_variable": NodeKind.VARIABLE,
    "class_variable": NodeKind.VARIABLE,
    "global_variable": NodeKind.VARIABLE,
    "splat_argument": NodeKind.VARIABLE,
    "constant": NodeKind.CONSTANT,
    "scope_resolution": NodeKind.CONSTANT,
    "integer": NodeKind.LITERAL,
    "float": NodeKind.LITERAL,
    "true": NodeKind.LITERAL,
    "false": NodeKind.LITERAL,
    "nil": NodeKind.LITERAL,
    "comment": NodeKind.COMMENT,
}

# Parts of a string literal that make up its value
STRING_PARTS = ("string_content", "escape_sequence")


class RubyAdapter(SyntaxAdapter):
    """Syntax adapter for Ruby source using the tree-sitter Ruby grammar."""

    grammar = "ruby"

    def __init__(self):
        self.parser = get_parser("ruby")

    def parse(self, text: str, filename: str | None = None) -> SyntaxTree:
        """Parse Ruby source into a ``SyntaxTree``.

        Raises:
            ParseError: if tree-sitter reports a syntax error anywhere in the file
        """
        buffer = text.encode("utf-8")
        tree = self.parser.parse(buffer)
        root = tree.root_node

        if root.has_error:
            bad = _first_error(root)
            line = bad.start_point[0] + 1 if bad is not None else None
            raise ParseError("Ruby syntax error", line=line, filename=filename)

        logger.debug("Parsed %s (%d bytes)", filename or "<source>", len(buffer))
        return SyntaxTree(root=self._convert(root, buffer), source=text, buffer=buffer)

    def _convert(self, node, buffer: bytes) -> SyntaxNode:
        kind = NODE_KINDS.get(node.type, NodeKind.OTHER)
        if kind is NodeKind.STRING and any(
            child.type == "interpolation" for child in node.named_children
        ):
            kind = NodeKind.INTERPOLATED_STRING

        children = []
        arguments = ()
        name = None
        value = None

        if kind is NodeKind.CALL:
            args_node = node.child_by_field_name("arguments")
            for child in node.named_children:
                converted = self._convert(child, buffer)
                children.append(converted)
                if args_node is not None and child == args_node:
                    arguments = tuple(
                        arg for arg in converted.children if arg.kind is not NodeKind.COMMENT
                    )
            name = _call_name(node, buffer)
        else:
            children = [self._convert(child, buffer) for child in node.named_children]

        if kind is NodeKind.STRING or node.type == "delimited_symbol":
            value = "".join(
                _text(child, buffer) for child in node.named_children
                if child.type in STRING_PARTS
            )
        elif node.type == "simple_symbol":
            value = _text(node, buffer)[1:]
        elif node.type == "hash_key_symbol":
            value = _text(node, buffer)
        elif kind is NodeKind.PAIR:
            key = node.child_by_field_name("key")
            if key is not None:
                name = next(
                    (c.value for c in children if c.span.start == key.start_byte), None
                )

        return SyntaxNode(
            kind=kind,
            span=Span(node.start_byte, node.end_byte),
            line=node.start_point[0] + 1,
            grammar_type=node.type,
            children=tuple(children),
            arguments=arguments,
            name=name,
            value=value,
        )


def _text(node, buffer: bytes) -> str:
    return buffer[node.start_byte:node.end_byte].decode("utf-8")


def _call_name(node, buffer: bytes) -> str | None:
    if node.type == "call":
        method = node.child_by_field_name("method")
        return _text(method, buffer) if method is not None else None
    if node.type == "element_reference":
        return "[]"
    operator = node.child_by_field_name("operator")
    return _text(operator, buffer) if operator is not None else None


def _first_error(root):
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed(node.children))
    return None


def parse_ruby(content: str, filename: str | None = None) -> SyntaxTree:
    """Parse Ruby source content into a syntax tree.

    Args:
        content: The Gemfile or gemspec content
        filename: Optional filename used in error messages

    Returns:
        Parsed SyntaxTree
    """
    return RubyAdapter().parse(content, filename=filename)
