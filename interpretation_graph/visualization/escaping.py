"""
Name Escaping

Turns domain names into text that is safe inside the DOT source and inside
the SVG the renderer produces from it.
"""

from __future__ import annotations
from urllib.parse import quote
import hashlib
import html


# Characters encodeURIComponent leaves alone besides letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"

_TYPE_HASH_SALT = b"interpretation-graph:type-hash"


def encode_name(name: str) -> str:
    """
    Escape a name for use as an SVG element `id` and as a `url(#...)`
    reference.

    Colons are allowed in such ids; quotes and percent signs are not.
    Underscores are tripled first so that the underscores introduced for
    apostrophes and percent escapes stand out from literal ones.
    """
    return (
        quote(name, safe=_URI_COMPONENT_SAFE)
        .replace('%3A', ':')
        .replace('_', '___')
        .replace("'", '__')
        .replace('%', '_')
    )


def escape_html(text: str) -> str:
    """Escape text for an HTML-like DOT label."""
    return html.escape(text, quote=True)


def obfuscate_color(type_hash: str) -> str:
    """
    Map a type hash to a stable color class that does not reveal it.

    Equal hashes always map to equal classes.
    """
    digest = hashlib.sha256(_TYPE_HASH_SALT + type_hash.encode('utf-8'))
    return digest.hexdigest()[:6]
