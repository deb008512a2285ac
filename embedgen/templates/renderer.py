# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Template renderer.

Executes one binding's template against a fresh TemplateContext and feeds
the imports it requested into the package's ImportManager.
"""

import logging

import jinja2

from .context import TemplateContext
from ..data import Fragment, TemplateBinding
from ..errors import TemplateExecutionError
from ..imports import ImportManager

logger = logging.getLogger(__name__)


def render_binding(binding: TemplateBinding, imports: ImportManager) -> Fragment:
    """Render a binding into a Fragment.

    Args:
        binding: Declaration and template to render.
        imports: Package-level import accumulator. Only updated when
            rendering succeeds.

    Returns:
        Fragment holding the rendered text.

    Raises:
        TemplateExecutionError: The template failed to render or requested
            an invalid import path.
    """
    context = TemplateContext.for_binding(binding)
    declaration = binding.declaration

    try:
        text = binding.template.render(context.variables())
        pending = ImportManager()
        pending.extend(context.pending_imports)
    except Exception as e:
        # Any failure inside template code belongs to this binding
        raise TemplateExecutionError(declaration.name, binding.name, _describe(e)) from e

    imports.extend(pending.finalize())
    logger.debug(
        f"Rendered {binding.name} for {declaration.name}: "
        f"{len(text)} chars, {len(context.pending_imports)} import requests"
    )
    return Fragment(binding=binding, text=text)


def _describe(error: Exception) -> str:
    if isinstance(error, jinja2.TemplateError):
        lineno = getattr(error, "lineno", None)
        message = error.message or type(error).__name__
        return f"line {lineno}: {message}" if lineno else message
    return f"{type(error).__name__}: {error}"
