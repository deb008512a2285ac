############################################################################
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
############################################################################
"""Go declaration scanner.

Parses every Go source file of a package directory with tree-sitter and
extracts the top-level struct and interface declarations, their named
members and their embedded (unnamed) members.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from tree_sitter import Node

from . import grammar
from ..data import Declaration, Member, ScanResult
from ..errors import SourceParseError

logger = logging.getLogger(__name__)

# https://go.dev/s/generatedcode
GENERATED_MARKER_RE = re.compile(r"^// Code generated .* DO NOT EDIT\.$", re.MULTILINE)
_PACKAGE_LINE_RE = re.compile(r"^package\s", re.MULTILINE)


def is_generated_source(content: str) -> bool:
    """True if the file carries Go's generated-code marker before its package clause."""
    match = _PACKAGE_LINE_RE.search(content)
    head = content[:match.start()] if match else content
    return GENERATED_MARKER_RE.search(head) is not None


def _read_source(path: Path) -> str:
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        head = data[:e.start]
        line = head.count(b"\n") + 1
        column = e.start - (head.rfind(b"\n") + 1) + 1
        raise SourceParseError(path, line, column, "invalid UTF-8") from e


def _text(node: Node) -> str:
    return node.text.decode("utf8")


def _position(node: Node) -> Tuple[int, int]:
    return node.start_point[0] + 1, node.start_point[1] + 1


class DeclarationScanner:
    """Extracts Declarations from Go source.

    One scanner holds one tree-sitter parser and must not be shared
    between threads.
    """

    def __init__(self, output_filename: str = "embedgen_gen.go"):
        self.output_filename = output_filename
        self.parser = grammar.create_parser()

    # --- Directory level -------------------------------------------------

    def source_files(self, directory: Path) -> List[Path]:
        """Go files to scan, in file-name order.

        Test files, files the go tool ignores (names starting with `_` or
        `.`) and the tool's own output are excluded here. Files
        generated by other tools are excluded after reading, in scan().
        """
        files = []
        for path in sorted(Path(directory).glob("*.go")):
            if not path.is_file():
                continue
            name = path.name
            if (name.startswith(("_", ".")) or name.endswith("_test.go")
                    or name == self.output_filename):
                logger.debug(f"Skipping {name}")
                continue
            files.append(path)
        return files

    def scan(self, directory: Path) -> ScanResult:
        """Scan a package directory.

        Args:
            directory: Directory holding the package's .go files.

        Returns:
            ScanResult with declarations in (file, declaration) order.

        Raises:
            SourceParseError: A file has a syntax error or its package
                clause disagrees with earlier files.
        """
        directory = Path(directory)
        result = ScanResult(directory=directory, package=None)

        for path in self.source_files(directory):
            content = _read_source(path)
            if is_generated_source(content):
                logger.debug(f"Skipping generated file {path.name}")
                continue

            package, declarations = self.parse(content, path)
            if result.package is None:
                result.package = package
            elif package != result.package:
                line, column = self._package_position(content)
                raise SourceParseError(
                    path, line, column,
                    f"package {package} conflicts with package {result.package}",
                )
            result.files.append(path)
            result.declarations.extend(declarations)

        logger.info(
            f"Scanned {len(result.files)} files in {directory}: "
            f"{len(result.declarations)} declarations"
        )
        return result

    # --- File level ------------------------------------------------------

    def parse(self, content: str, source_file: Path) -> Tuple[str, List[Declaration]]:
        """Parse one Go file into its package name and declarations.

        Raises:
            SourceParseError: If tree-sitter reports an error or the file
                has no package clause.
        """
        source_file = Path(source_file)
        tree = self.parser.parse(bytes(content, "utf8"))
        root = tree.root_node

        if root.has_error:
            line, column = grammar.error_position(root)
            logger.debug(f"Syntax error in {source_file} near {line}:{column}")
            raise SourceParseError(source_file, line, column, "syntax error")

        package = self._extract_package(root)
        if package is None:
            raise SourceParseError(source_file, 1, 1, "missing package clause")

        declarations = []
        for child in root.named_children:
            if child.type != grammar.TYPE_DECLARATION:
                continue
            for spec in child.named_children:
                if spec.type != grammar.TYPE_SPEC:
                    continue
                declaration = self._parse_type_spec(spec, package, source_file)
                if declaration is not None:
                    declarations.append(declaration)

        logger.debug(f"{source_file.name}: package {package}, {len(declarations)} declarations")
        return package, declarations

    def _extract_package(self, root: Node) -> Optional[str]:
        for child in root.named_children:
            if child.type == grammar.PACKAGE_CLAUSE:
                for ident in child.named_children:
                    if ident.type == grammar.PACKAGE_IDENTIFIER:
                        return _text(ident)
        return None

    def _package_position(self, content: str) -> Tuple[int, int]:
        root = self.parser.parse(bytes(content, "utf8")).root_node
        for child in root.named_children:
            if child.type == grammar.PACKAGE_CLAUSE:
                return _position(child)
        return 1, 1

    def _parse_type_spec(self, spec: Node, package: str, source_file: Path) -> Optional[Declaration]:
        name_node = spec.child_by_field_name("name")
        type_node = spec.child_by_field_name("type")
        if name_node is None or type_node is None:
            return None

        if type_node.type == grammar.STRUCT_TYPE:
            kind = "struct"
            members, embedded = self._parse_struct(type_node)
        elif type_node.type == grammar.INTERFACE_TYPE:
            kind = "interface"
            members, embedded = self._parse_interface(type_node)
        else:
            return None

        return Declaration(
            name=_text(name_node),
            package=package,
            kind=kind,
            members=tuple(members),
            embedded=tuple(embedded),
            source_file=source_file,
            line=_position(spec)[0],
        )

    # --- Members ---------------------------------------------------------

    def _parse_struct(self, struct_node: Node) -> Tuple[List[Member], List[str]]:
        members: List[Member] = []
        embedded: List[str] = []
        for field_list in struct_node.named_children:
            if field_list.type != grammar.FIELD_DECLARATION_LIST:
                continue
            for field_node in field_list.named_children:
                if field_node.type != grammar.FIELD_DECLARATION:
                    continue
                type_node = field_node.child_by_field_name("type")
                if type_node is None:
                    continue
                tag_node = field_node.child_by_field_name("tag")
                tag = _unquote_tag(_text(tag_node)) if tag_node is not None else None
                names = field_node.children_by_field_name("name")
                line = _position(field_node)[0]

                if not names:
                    embedded_name = embedded_type_name(type_node)
                    if embedded_name is not None:
                        embedded.append(embedded_name)
                    continue
                type_name = _text(type_node)
                for name_node in names:
                    members.append(Member(_text(name_node), type_name, tag, line))
        return members, embedded

    def _parse_interface(self, iface_node: Node) -> Tuple[List[Member], List[str]]:
        members: List[Member] = []
        embedded: List[str] = []
        for elem in iface_node.named_children:
            if elem.type in grammar.METHOD_ELEMS:
                name_node = elem.child_by_field_name("name")
                if name_node is None:
                    continue
                members.append(Member(_text(name_node), _method_signature(elem), None,
                                      _position(elem)[0]))
            elif elem.type in grammar.EMBEDDED_INTERFACE_ELEMS:
                # Union and approximation elements (~int | string) embed nothing.
                types = [c for c in elem.named_children if c.type != grammar.COMMENT]
                if len(types) == 1:
                    embedded_name = embedded_type_name(types[0])
                    if embedded_name is not None:
                        embedded.append(embedded_name)
                elif not types:
                    embedded_name = embedded_type_name(elem)
                    if embedded_name is not None:
                        embedded.append(embedded_name)
        return members, embedded


def embedded_type_name(type_node: Node) -> Optional[str]:
    """Name Go gives an embedded field of this type.

    `Foo`, `*Foo`, `pkg.Foo` and `Foo[T]` all embed as `Foo`.
    """
    node_type = type_node.type
    if node_type in (grammar.TYPE_IDENTIFIER, "interface_type_name"):
        return _text(type_node).rpartition(".")[2]
    if node_type == grammar.QUALIFIED_TYPE:
        name = type_node.child_by_field_name("name")
        return _text(name) if name is not None else _text(type_node).rpartition(".")[2]
    if node_type in (grammar.POINTER_TYPE, grammar.GENERIC_TYPE):
        inner = type_node.child_by_field_name("type")
        if inner is None:
            inner = next((c for c in type_node.named_children), None)
        return embedded_type_name(inner) if inner is not None else None
    return None


def _method_signature(elem: Node) -> str:
    params = elem.child_by_field_name("parameters")
    result = elem.child_by_field_name("result")
    signature = "func" + (_text(params) if params is not None else "()")
    if result is not None:
        signature += " " + _text(result)
    return signature


def _unquote_tag(literal: str) -> str:
    if literal.startswith("`") and literal.endswith("`"):
        return literal[1:-1]
    if literal.startswith('"') and literal.endswith('"'):
        return literal[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return literal


def scan_package(directory: Path, output_filename: str = "embedgen_gen.go") -> ScanResult:
    """Scan a package directory with a fresh scanner."""
    return DeclarationScanner(output_filename).scan(Path(directory))
