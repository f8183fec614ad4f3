"""Path template resolution and request mapping checks.

A path template is a literal path with `{name}` placeholders, for example
`users/{user_id}/orders`. Placeholders are filled from the top-level keys of
a request mapping.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class PathResolution:
    """Result of filling a path template from a request mapping.

    Attributes:
        template: The original template
        path: Template with every resolvable placeholder replaced
        consumed: Mapping keys used by a placeholder
        missing: Placeholders with no key or a null value, in template order
    """

    template: str
    path: str
    consumed: frozenset[str] = field(default_factory=frozenset)
    missing: tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        """Whether every placeholder was filled."""
        return not self.missing


def path_variables(template: str) -> list[str]:
    """Return the placeholder names of a template, in order of appearance."""
    return _TOKEN_PATTERN.findall(template)


def _path_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_path(template: str, request_json: Mapping[str, Any] | None) -> PathResolution:
    """Fill the placeholders of a template.

    Args:
        template: Path containing `{name}` placeholders
        request_json: Mapping the values are taken from; None means no values

    Returns:
        The resolution. Placeholders that could not be filled are left in the
        path and listed in `missing`.
    """
    values = request_json or {}
    consumed: set[str] = set()
    missing: list[str] = []

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if values.get(name) is None:
            missing.append(name)
            return match.group(0)
        consumed.add(name)
        return _path_value(values[name])

    path = _TOKEN_PATTERN.sub(substitute, template)
    return PathResolution(
        template=template,
        path=path,
        consumed=frozenset(consumed),
        missing=tuple(missing),
    )


def find_null_fields(request_json: Mapping[str, Any], prefix: str = "") -> list[str]:
    """List every null value in a mapping, descending into nested containers.

    Args:
        request_json: Mapping to inspect
        prefix: Dotted prefix for the reported field names

    Returns:
        Dotted names of null fields, e.g. `["nested.field"]`
    """
    nulls: list[str] = []
    for key, value in request_json.items():
        name = f"{prefix}{key}"
        nulls.extend(_find_nulls(value, name))
    return nulls


def _find_nulls(value: Any, name: str) -> list[str]:
    if value is None:
        return [name]
    if isinstance(value, Mapping):
        return find_null_fields(value, prefix=f"{name}.")
    if isinstance(value, list | tuple):
        nulls: list[str] = []
        for index, item in enumerate(value):
            nulls.extend(_find_nulls(item, f"{name}[{index}]"))
        return nulls
    return []


def unconsumed_fields(request_json: Mapping[str, Any], resolution: PathResolution) -> list[str]:
    """Top-level keys of the mapping that no placeholder used."""
    return [key for key in request_json if key not in resolution.consumed]
