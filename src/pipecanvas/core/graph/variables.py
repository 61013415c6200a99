"""Template variable helpers for text-bearing nodes.

Text and LLM nodes reference upstream values as ``{{ name }}``. These helpers
only read node ``data``; they never change the topology.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

_VARIABLE = re.compile(r"\{\{([^}]+)\}\}")
_VALID_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def extract_variables(text: str | None) -> list[str]:
    """Return the unique variable names referenced in ``text``, in order."""
    if not text:
        return []
    names: list[str] = []
    for match in _VARIABLE.finditer(text):
        name = match.group(1).strip()
        if name and name not in names:
            names.append(name)
    return names


def replace_variables(text: str, values: Mapping[str, object]) -> str:
    """Substitute known variables; unknown ones are left untouched."""

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        return str(values[name]) if name in values else match.group(0)

    return _VARIABLE.sub(_sub, text)


def is_valid_variable_name(name: str | None) -> bool:
    """Return ``True`` for identifier-like names (``[a-zA-Z_][a-zA-Z0-9_]*``)."""
    if not name:
        return False
    return bool(_VALID_NAME.match(name.strip()))


__all__ = ["extract_variables", "is_valid_variable_name", "replace_variables"]
