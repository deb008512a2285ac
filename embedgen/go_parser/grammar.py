############################################################################
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
############################################################################
"""Handles Go grammar loading and node type constants for tree-sitter.

The grammar comes from the tree-sitter-go wheel, which exposes a capsule
through `tree_sitter_go.language()` that tree-sitter's Language wraps
directly. Node type names differ slightly between grammar releases, so the
constants below list every spelling the scanner accepts.
"""

import logging
from functools import lru_cache
from typing import Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

logger = logging.getLogger(__name__)

# Top level
PACKAGE_CLAUSE = "package_clause"
PACKAGE_IDENTIFIER = "package_identifier"
TYPE_DECLARATION = "type_declaration"
TYPE_SPEC = "type_spec"
COMMENT = "comment"

# Composite types
STRUCT_TYPE = "struct_type"
INTERFACE_TYPE = "interface_type"
FIELD_DECLARATION_LIST = "field_declaration_list"
FIELD_DECLARATION = "field_declaration"

# Interface elements (method_spec/constraint_elem in older grammars)
METHOD_ELEMS = ("method_elem", "method_spec")
EMBEDDED_INTERFACE_ELEMS = ("type_elem", "constraint_elem", "interface_type_name")

# Type expressions an embedded field may use
TYPE_IDENTIFIER = "type_identifier"
QUALIFIED_TYPE = "qualified_type"
POINTER_TYPE = "pointer_type"
GENERIC_TYPE = "generic_type"


@lru_cache(maxsize=1)
def load_language() -> Language:
    """Load the Go grammar once per process.

    Returns:
        A tree-sitter Language object for Go.
    """
    language = Language(tree_sitter_go.language())
    logger.debug("Loaded tree-sitter Go grammar")
    return language


def create_parser() -> Parser:
    """Create a new parser bound to the Go grammar.

    Parsers are cheap and not shared between threads.
    """
    return Parser(load_language())


def first_error_node(root: Node) -> Optional[Node]:
    """Descend along has_error children to the innermost error or missing node."""
    current = root
    while True:
        if current.is_error or current.is_missing:
            return current
        next_node = None
        for child in current.children:
            if child.is_error or child.is_missing or child.has_error:
                next_node = child
                break
        if next_node is None:
            return current if current is not root else None
        current = next_node


def error_position(root: Node) -> Tuple[int, int]:
    """1-based (line, column) of the first syntax error under root."""
    node = first_error_node(root)
    if node is None:
        return 1, 1
    return node.start_point[0] + 1, node.start_point[1] + 1
