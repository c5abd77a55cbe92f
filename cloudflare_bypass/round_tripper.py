"""
Request-sending decorator that helps the first request pass Cloudflare's checks.

The adapter adds the browser-like request headers a request is missing and
sets the TLS curve preferences of the wrapped transport. It does NOT solve
challenges served by Cloudflare; it only avoids being flagged on the very
first request.

Usage:

    session = requests.Session()
    adapter = add_cloudflare_bypass(BrowserTLSAdapter())
    session.mount("https://", adapter)
"""

from __future__ import annotations

import logging
from typing import Any

from requests import PreparedRequest, Response
from requests.adapters import BaseAdapter

from .config import Options, get_default_options
from .header_provider import HeaderProvider
from .tls import BrowserTLSAdapter, cloudflare_tls_config, configure_tls

logger = logging.getLogger(__name__)


class CloudflareBypassAdapter(BaseAdapter):
    """
    Transport adapter adding the missing bypass headers before delegating.

    `inner` is never closed by this adapter. When it is None, a
    BrowserTLSAdapter with the fixed curve preferences is created and
    owned instead. Options are copied on construction and default to
    get_default_options().
    """

    def __init__(self, inner: BaseAdapter | None = None, options: Options | None = None) -> None:
        super().__init__()
        if options is None:
            options = get_default_options()
        self._headers = HeaderProvider(options)

        self._owns_inner = inner is None
        if inner is None:
            logger.debug("CloudflareBypassAdapter: no inner transport, creating a default one.")
            inner = BrowserTLSAdapter(cloudflare_tls_config())
        self.inner = inner

    @property
    def options(self) -> Options:
        return self._headers.options

    def send(self, request: PreparedRequest, **kwargs: Any) -> Response:
        """
        Adds the missing headers to `request` and sends it through the inner transport.

        Keyword arguments (stream, timeout, verify, cert, proxies) and any
        exception raised by the inner transport pass through unchanged.
        """
        added = self._headers.apply(request.headers)
        if added:
            logger.debug(f"CloudflareBypassAdapter: added headers {added} to {request.url}")
        return self.inner.send(request, **kwargs)

    def close(self) -> None:
        if self._owns_inner:
            self.inner.close()


def add_cloudflare_bypass(
    inner: BaseAdapter | None = None,
    options: Options | None = None,
) -> CloudflareBypassAdapter:
    """
    Wraps `inner` so that every request carries the bypass headers.

    If `inner` exposes a TLS configuration, its curve preferences are
    replaced once, here. Transports without one are wrapped as they are.
    Finish wrapping before `inner` is used by other threads.

    Args:
        inner: The transport to wrap, or None for a default one.
        options: Header options; the defaults are used when omitted.

    Returns:
        The adapter to mount in place of `inner`.
    """
    if inner is not None:
        configure_tls(inner)
    return CloudflareBypassAdapter(inner, options)
