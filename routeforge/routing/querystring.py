"""
Query-string codec used by routes.

Decodes the ``?...`` suffix captured by a route into extra parameters,
and encodes leftover build parameters back into a query string.
"""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode


class QueryStringCodec:
    """
    Thin codec over ``urllib.parse``.

    On repeated keys the first value wins. Blank values are kept, so
    ``a=&b=1`` decodes to ``{"a": "", "b": "1"}``.
    """

    def decode(self, query: Optional[str]) -> Dict[str, str]:
        """Decode a query string (without the leading ``?``)."""
        if not query:
            return {}

        params: Dict[str, str] = {}
        for key, value in parse_qsl(query, keep_blank_values=True):
            params.setdefault(key, value)
        return params

    def encode(self, params: Optional[Mapping[str, Any]]) -> str:
        """Encode a mapping, skipping None values. Keeps insertion order."""
        if not params:
            return ""
        return urlencode([(key, str(value)) for key, value in params.items() if value is not None])


default_codec = QueryStringCodec()
