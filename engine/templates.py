import re
from typing import Any, Mapping

from .coercion import stringify

TOKEN_RE = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")


def render_template(template: Any, record: Mapping[str, Any] | None) -> str:
    """
    Replace ``{{field}}`` tokens with the record's values.

    Missing, null or unknown fields render as an empty string. Text that does
    not match the token grammar is left untouched.
    """
    source = "" if template is None else str(template)
    values = record or {}

    def substitute(match: re.Match) -> str:
        return stringify(values.get(match.group(1).strip()))

    return TOKEN_RE.sub(substitute, source)
