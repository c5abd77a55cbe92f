# cloudflare_bypass/__init__.py
from .config import (
    BypassSettings,
    Options,
    get_default_options
)

from .header_provider import (
    HeaderProvider,
    add_missing_headers
)

from .round_tripper import (
    CloudflareBypassAdapter,
    add_cloudflare_bypass
)

from .session_manager import (
    SessionManager,
    mount_cloudflare_bypass
)

from .tls import (
    CLOUDFLARE_CURVE_PREFERENCES,
    BrowserTLSAdapter,
    CurveID,
    TLSConfig,
    TLSConfigurable,
    cloudflare_tls_config,
    configure_tls
)

__all__ = [
    "BypassSettings",
    "Options",
    "get_default_options",
    "HeaderProvider",
    "add_missing_headers",
    "CloudflareBypassAdapter",
    "add_cloudflare_bypass",
    "SessionManager",
    "mount_cloudflare_bypass",
    "CLOUDFLARE_CURVE_PREFERENCES",
    "BrowserTLSAdapter",
    "CurveID",
    "TLSConfig",
    "TLSConfigurable",
    "cloudflare_tls_config",
    "configure_tls",
]
