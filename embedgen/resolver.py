# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Binding resolution.

A declaration opts into a template by embedding a type whose name matches a
`<Name>.tmpl` file in the declaration's directory. Matching is by exact name
only; the embedded type itself is never resolved.
"""

import logging
from typing import Iterable, List

from .data import Declaration, TemplateBinding
from .templates.catalog import TemplateCatalog

logger = logging.getLogger(__name__)


def resolve_declaration(declaration: Declaration, catalog: TemplateCatalog) -> List[TemplateBinding]:
    """Bindings for one declaration, one per distinct matching embedded name."""
    bindings = []
    seen = set()
    for name in declaration.embedded:
        if name in seen:
            continue
        seen.add(name)
        template = catalog.lookup(declaration.directory, name)
        if template is None:
            continue
        bindings.append(TemplateBinding(declaration=declaration, template=template))
        logger.debug(f"Bound {declaration.name} to template {name}")
    return bindings


def resolve_bindings(declarations: Iterable[Declaration], catalog: TemplateCatalog) -> List[TemplateBinding]:
    """Bindings for all declarations, in scan order.

    Raises:
        TemplateParseError: A matching template file does not compile.
    """
    bindings: List[TemplateBinding] = []
    for declaration in declarations:
        bindings.extend(resolve_declaration(declaration, catalog))
    return bindings
