# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Template context for one template binding.

The context is what a template sees while it renders: the declaring type's
name, package and members, plus `add_import`, which records import paths
the generated code needs. A fresh context is built for every binding.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..data import Declaration, Member, TemplateBinding


@dataclass
class TemplateContext:
    """Per-binding view over a Declaration with an import side channel."""

    declaration: Declaration
    template_name: str
    pending_imports: List[str] = field(default_factory=list)

    @classmethod
    def for_binding(cls, binding: TemplateBinding) -> "TemplateContext":
        return cls(declaration=binding.declaration, template_name=binding.name)

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def package(self) -> str:
        return self.declaration.package

    @property
    def kind(self) -> str:
        return self.declaration.kind

    @property
    def members(self) -> Tuple[Member, ...]:
        return self.declaration.members

    @property
    def embedded(self) -> Tuple[str, ...]:
        return self.declaration.embedded

    @property
    def receiver(self) -> str:
        """Conventional method receiver name, e.g. `b` for `Bar`."""
        return self.name[:1].lower()

    @property
    def imports(self) -> Tuple[str, ...]:
        return tuple(self.pending_imports)

    def add_import(self, path: str) -> str:
        """Request an import for the generated file.

        Returns an empty string so the call can sit in an expression tag
        without producing output.
        """
        self.pending_imports.append(path)
        return ""

    # Template-facing spelling of add_import
    AddImport = add_import

    def variables(self) -> Dict[str, Any]:
        """Names available at the top level of the template."""
        return {
            'ctx': self,
            'name': self.name,
            'package': self.package,
            'kind': self.kind,
            'members': self.members,
            'embedded': self.embedded,
            'declaration': self.declaration,
            'template_name': self.template_name,
            'receiver': self.receiver,
            'add_import': self.add_import,
            'AddImport': self.add_import,
        }
