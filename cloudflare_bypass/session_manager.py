# cloudflare_bypass/session_manager.py

import logging

import requests

from .config import Options, get_default_options
from .round_tripper import add_cloudflare_bypass
from .tls import BrowserTLSAdapter

# Get a logger instance for this module
logger = logging.getLogger(__name__)


def mount_cloudflare_bypass(session: requests.Session, options: Options | None = None) -> requests.Session:
    """
    Mounts the bypass adapter on `session` for http:// and https://.

    requests.Session adds its own User-Agent and Accept before the adapter
    sees the request, so session-level defaults sharing a name with an
    injected header are removed from session.headers.
    """
    if options is None:
        options = get_default_options()

    for prefix in ("https://", "http://"):
        session.mount(prefix, add_cloudflare_bypass(BrowserTLSAdapter(), options))

    if options.add_missing_headers:
        injected = {name.lower() for name in options.headers}
        for name in list(session.headers):
            if name.lower() in injected:
                del session.headers[name]

    return session


class SessionManager:
    """
    Creates requests.Session objects that send browser-like first requests.
    """
    def __init__(self, options: Options | None = None):
        self.options = options if options is not None else get_default_options()

    def get_session(self) -> requests.Session:
        """
        Creates a new session with the bypass adapter mounted.
        """
        session = mount_cloudflare_bypass(requests.Session(), self.options)
        logger.info("SessionManager: new session with Cloudflare bypass adapters mounted.")
        return session
