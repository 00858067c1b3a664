"""Query-string helpers for request parameters and page URLs."""

from typing import Any, Dict, Mapping, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def parse_data_params(raw: Union[str, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Turn caller-supplied request data into a mutable parameter dict.

    Query strings may start with ``?``. Keys ending in ``[]`` collect every
    value into a list, the way form arrays are submitted; for other keys the
    last value wins.
    """
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)

    params: Dict[str, Any] = {}
    for key, value in parse_qsl(raw.lstrip("?"), keep_blank_values=True):
        if key.endswith("[]"):
            params.setdefault(key, []).append(value)
        else:
            params[key] = value
    return params


def update_query_param(url: str, key: str, value: Any) -> str:
    """Return ``url`` with ``key`` set to ``value`` in its query string."""
    parts = urlsplit(url)
    pairs = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != key]
    pairs.append((key, str(value)))
    return urlunsplit(parts._replace(query=urlencode(pairs)))
