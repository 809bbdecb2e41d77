"""
``${NAME}`` substitution.

Values in ``component.toml`` may reference other config keys and
environment variables::

    VERSION = "1.4.${BUILDNUM}"
    DockerTag = "${VERSION}-${GIT_BRANCH}"

Lookup order for ``NAME``:

    1. top-level keys of the config document
    2. keys inside its group(s)
    3. the resolution context (environment snapshot plus seeded VCS facts)

so a config value shadows an environment variable of the same name. The
first definition found wins. Substitution is a single pass over the input:
text that a replacement introduces is not scanned again, and tokens with no
definition are left as they are.

The context replaces the process environment as the channel through which
derived facts become visible to substitution; nothing here writes to
``os.environ``.

Tags:
    variables, substitution, environment, ortelius-cli
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .config_file import ConfigDocument, iter_flat, iter_grouped

_TOKEN_RE = re.compile(r"\$\{([^}]*)\}")


@dataclass
class ResolutionContext:
    """Environment values visible to ``${NAME}`` substitution."""

    environ: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_process(cls) -> ResolutionContext:
        """Snapshot the current process environment."""
        return cls(dict(os.environ))

    def seed(self, name: str, value: str) -> bool:
        """Add ``name`` unless the environment already defines it.

        Returns True if the value was added.
        """
        if name in self.environ:
            return False
        self.environ[name] = value
        return True

    def get(self, name: str, default: str = "") -> str:
        return self.environ.get(name, default)


def build_lookup(document: ConfigDocument, context: ResolutionContext | Mapping[str, str]) -> dict[str, str]:
    """Merge every substitution source into one mapping, earliest source winning."""
    environ = context.environ if isinstance(context, ResolutionContext) else context
    lookup: dict[str, str] = {}
    for key, value in iter_flat(document):
        lookup.setdefault(key, value)
    for key, value in iter_grouped(document):
        lookup.setdefault(key, value)
    for key, value in environ.items():
        lookup.setdefault(key, value)
    return lookup


def resolve_vars(
    value: str,
    document: ConfigDocument,
    context: ResolutionContext | Mapping[str, str],
) -> str:
    """Replace each known ``${NAME}`` in ``value``; unknown tokens stay verbatim."""
    if "${" not in value:
        return value
    lookup = build_lookup(document, context)
    return substitute(value, lookup)


def substitute(value: str, lookup: Mapping[str, str]) -> str:
    """Single-pass ``${NAME}`` replacement against a prepared lookup."""

    def _replace(match: re.Match[str]) -> str:
        return lookup.get(match.group(1), match.group(0))

    return _TOKEN_RE.sub(_replace, value)
