from typing import Dict, Optional
from urllib.parse import parse_qsl

from slugwiki.domain.exceptions import ValidationError


def parse_query_string(query: Optional[str]) -> Dict[str, str]:
    """
    Parse a raw query string into a flat dict. The last value wins
    for repeated keys.
    """
    if not query:
        return {}
    return dict(parse_qsl(query, keep_blank_values=True))


def int_param(
    params: Dict[str, str],
    name: str,
    *,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    raw = params.get(name)
    if raw is None or raw == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"Parameter '{name}' must be an integer")

    if minimum is not None and value < minimum:
        raise ValidationError(f"Parameter '{name}' must be at least {minimum}")

    if maximum is not None:
        value = min(value, maximum)

    return value
