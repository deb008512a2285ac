# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Template catalog for embedgen.

Templates live next to the Go sources that use them, one `<Name>.tmpl` file
per name. The catalog loads a template the first time a name is looked up
in a directory and keeps it (or the fact that it does not exist) for the
rest of the run.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError
from jinja2 import Template as JinjaTemplate

from ..errors import TemplateParseError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_SUFFIX = ".tmpl"


@dataclass(frozen=True)
class Template:
    """A compiled template file."""
    name: str
    path: Path
    compiled: JinjaTemplate

    def render(self, variables: Dict[str, Any]) -> str:
        return self.compiled.render(**variables)


def create_environment() -> Environment:
    """Create the Jinja2 environment shared by all templates of a catalog."""
    env = Environment(
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )

    def to_camel_case(text: str) -> str:
        return ''.join(word[:1].upper() + word[1:] for word in text.split('_') if word)

    def to_snake_case(text: str) -> str:
        s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', text)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()

    def lower_first(text: str) -> str:
        return text[:1].lower() + text[1:]

    def upper_first(text: str) -> str:
        return text[:1].upper() + text[1:]

    def go_quote(value: Any) -> str:
        # JSON string escaping is valid Go interpreted-string syntax
        return json.dumps(str(value))

    def receiver_name(type_name: str) -> str:
        return type_name[:1].lower() or "r"

    env.filters.update({
        'camelcase': to_camel_case,
        'snakecase': to_snake_case,
        'lower_first': lower_first,
        'upper_first': upper_first,
        'quote': go_quote,
        'receiver': receiver_name,
    })
    return env


class TemplateCatalog:
    """Run-scoped cache of templates keyed by (directory, name).

    Both found and missing templates are remembered, so every
    `<directory>/<name><suffix>` file is read and compiled at most once.
    """

    def __init__(self, suffix: str = DEFAULT_TEMPLATE_SUFFIX,
                 environment: Optional[Environment] = None):
        self.suffix = suffix
        self.environment = environment or create_environment()
        self._cache: Dict[Tuple[Path, str], Optional[Template]] = {}
        self.parse_count = 0
        self.hits = 0

    def template_path(self, directory: Path, name: str) -> Path:
        return Path(directory) / f"{name}{self.suffix}"

    def lookup(self, directory: Path, name: str) -> Optional[Template]:
        """Return the template for name in directory, or None if there is none.

        Raises:
            TemplateParseError: The file exists but is not a valid template.
        """
        key = (Path(directory).resolve(), name)
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        path = self.template_path(key[0], name)
        if not path.is_file():
            logger.debug(f"No template for {name} in {key[0]}")
            self._cache[key] = None
            return None

        template = self._load(path, name)
        self._cache[key] = template
        return template

    def _load(self, path: Path, name: str) -> Template:
        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise TemplateParseError(path, f"invalid UTF-8 at byte {e.start}") from e
        self.parse_count += 1
        try:
            compiled = self.environment.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateParseError(path, e.message or str(e), e.lineno) from e
        logger.debug(f"Compiled template {path}")
        return Template(name=name, path=path, compiled=compiled)

    def clear(self) -> None:
        """Forget all cached lookups."""
        self._cache.clear()

    def stats(self) -> Dict[str, Any]:
        """Cache statistics."""
        return {
            'size': len(self._cache),
            'parse_count': self.parse_count,
            'hits': self.hits,
            'cached_templates': sorted(
                str(t.path) for t in self._cache.values() if t is not None
            ),
        }
