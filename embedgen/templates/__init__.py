# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Template loading, binding contexts and rendering."""

from .catalog import DEFAULT_TEMPLATE_SUFFIX, Template, TemplateCatalog, create_environment
from .context import TemplateContext
from .renderer import render_binding

__all__ = [
    'DEFAULT_TEMPLATE_SUFFIX',
    'Template',
    'TemplateCatalog',
    'TemplateContext',
    'create_environment',
    'render_binding',
]
