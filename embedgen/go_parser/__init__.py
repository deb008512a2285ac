############################################################################
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
############################################################################
"""Go source scanning for embedgen.

Example Usage:
    from embedgen.go_parser import scan_package
    result = scan_package(Path("internal/models"))
"""

from .scanner import DeclarationScanner, embedded_type_name, is_generated_source, scan_package

__all__ = ["DeclarationScanner", "embedded_type_name", "is_generated_source", "scan_package"]
