# cloudflare_bypass/header_provider.py

from typing import Mapping, MutableMapping

from .config import Options


def add_missing_headers(headers: MutableMapping[str, str], defaults: Mapping[str, str]) -> list[str]:
    """
    Sets every header from `defaults` that `headers` does not already contain.

    Presence is checked case-insensitively, so `accept: foo` blocks `Accept`.
    Existing entries are never replaced or removed.

    Args:
        headers: The request header collection, updated in place.
        defaults: Header name -> value pairs to add when missing.

    Returns:
        The names of the headers that were added.
    """
    present = {name.lower() for name in headers}
    added = []
    for name, value in defaults.items():
        if name.lower() not in present:
            headers[name] = value
            present.add(name.lower())
            added.append(name)
    return added


class HeaderProvider:
    """
    Applies a fixed set of browser-like headers to outgoing requests.
    """
    def __init__(self, options: Options):
        # Private copy, the caller may keep mutating its own headers dict
        self.options = options.model_copy(deep=True)

    def apply(self, headers: MutableMapping[str, str]) -> list[str]:
        """Adds the missing configured headers; no-op when injection is disabled."""
        if not self.options.add_missing_headers:
            return []
        return add_missing_headers(headers, self.options.headers)
