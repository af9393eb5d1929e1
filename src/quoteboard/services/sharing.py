# src/quoteboard/services/sharing.py
"""Share links for quotes."""

from __future__ import annotations

from urllib.parse import quote as url_quote

from quoteboard.models import Quote

from .short_code import encode, permalink

# Characters encodeURIComponent leaves alone, so links match what browsers build.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _component(value: str) -> str:
    return url_quote(value, safe=_URI_COMPONENT_SAFE)


def share_text(quote: Quote) -> str:
    """Return the text shared alongside the link."""
    return f'"{quote.content}" - {quote.author.name}'


def share_links(quote: Quote, base_url: str) -> dict[str, str]:
    """Return the permalink and a share intent URL per platform."""
    url = permalink(quote.id, base_url)
    text = share_text(quote)
    return {
        "copy": url,
        "twitter": f"https://twitter.com/intent/tweet?text={_component(text)}&url={_component(url)}",
        "facebook": f"https://www.facebook.com/sharer/sharer.php?u={_component(url)}",
        "whatsapp": f"https://wa.me/?text={_component(text + ' ' + url)}",
        "telegram": f"https://t.me/share/url?url={_component(url)}&text={_component(text)}",
    }


def share_title(quote: Quote) -> str:
    """Return the dialog title shown when sharing, e.g. ``Quote #04211``."""
    return f"Quote #{encode(quote.id)}"
