"""
TLS configuration for the bypass adapter.

Provides:
- CurveID / CLOUDFLARE_CURVE_PREFERENCES: the fixed curve preference order
- TLSConfig: the TLS settings a configurable transport carries
- TLSConfigurable: structural capability for transports exposing a TLSConfig
- configure_tls(): one-time overwrite of the curve list at wrap time
- BrowserTLSAdapter: a requests HTTPAdapter that builds its connections from a TLSConfig

The curve list mirrors what browsers accepted by Cloudflare offer, see
https://wiki.mozilla.org/Security/Server_Side_TLS for when it needs updating.
"""

from __future__ import annotations

import dataclasses
import logging
import ssl
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol, runtime_checkable

from requests.adapters import HTTPAdapter
from requests.utils import DEFAULT_CA_BUNDLE_PATH
from urllib3.util.ssl_ import create_urllib3_context

logger = logging.getLogger(__name__)


class CurveID(IntEnum):
    """Named elliptic curves, valued by their IANA TLS supported-group id."""

    P256 = 0x0017
    P384 = 0x0018
    P521 = 0x0019
    X25519 = 0x001D

    @property
    def openssl_name(self) -> str:
        return _OPENSSL_CURVE_NAMES[self]


_OPENSSL_CURVE_NAMES = {
    CurveID.P256: "prime256v1",
    CurveID.P384: "secp384r1",
    CurveID.P521: "secp521r1",
    CurveID.X25519: "X25519",
}

CLOUDFLARE_CURVE_PREFERENCES: tuple[CurveID, ...] = (
    CurveID.P256,
    CurveID.P384,
    CurveID.P521,
    CurveID.X25519,
)


@dataclass
class TLSConfig:
    """Client-side TLS settings of a transport."""

    curve_preferences: list[CurveID] = field(default_factory=list)
    ciphers: str | None = None

    def build_ssl_context(
        self,
        cert_reqs: ssl.VerifyMode = ssl.CERT_REQUIRED,
        ca_bundle: str | None = DEFAULT_CA_BUNDLE_PATH,
    ) -> ssl.SSLContext:
        """
        Builds an SSL context for urllib3 connection pools.

        The whole `curve_preferences` list is offered when the runtime has
        SSLContext.set_groups. Older runtimes only accept a single ECDH
        curve, so there the most-preferred entry is the one applied.

        Args:
            cert_reqs: ssl.CERT_NONE builds a context that skips certificate and hostname checks.
            ca_bundle: CA file loaded into a verifying context, None to leave loading to urllib3.
        """
        context = create_urllib3_context(ciphers=self.ciphers, cert_reqs=cert_reqs)
        if cert_reqs == ssl.CERT_NONE:
            # check_hostname has to go first, ssl refuses CERT_NONE while it is set
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        elif ca_bundle is not None:
            # requests skips its CA bundle once a pool carries its own context
            context.load_verify_locations(ca_bundle)

        if self.curve_preferences:
            if hasattr(context, "set_groups"):
                context.set_groups(":".join(curve.openssl_name for curve in self.curve_preferences))
            else:
                context.set_ecdh_curve(self.curve_preferences[0].openssl_name)
        return context


def cloudflare_tls_config() -> TLSConfig:
    """Returns a new TLSConfig with only the fixed curve preference list set."""
    return TLSConfig(curve_preferences=list(CLOUDFLARE_CURVE_PREFERENCES))


@runtime_checkable
class TLSConfigurable(Protocol):
    """A transport whose TLS configuration can be read and replaced."""

    def get_tls_config(self) -> TLSConfig | None:
        ...

    def set_tls_config(self, config: TLSConfig) -> None:
        ...


def configure_tls(inner: Any) -> bool:
    """
    Overwrites the curve preference list of `inner`'s TLS configuration.

    Only `curve_preferences` is replaced; every other TLS setting of the
    transport is kept. Transports without the capability are skipped.

    Returns:
        True if the configuration was updated, False if skipped.
    """
    if not isinstance(inner, TLSConfigurable):
        logger.debug(f"TLS: {type(inner).__name__} exposes no TLS configuration, skipping.")
        return False

    current = inner.get_tls_config() or TLSConfig()
    inner.set_tls_config(
        dataclasses.replace(current, curve_preferences=list(CLOUDFLARE_CURVE_PREFERENCES))
    )
    logger.debug(f"TLS: curve preferences applied to {type(inner).__name__}.")
    return True


class BrowserTLSAdapter(HTTPAdapter):
    """
    HTTPAdapter whose connection pools are built from a TLSConfig.

    urllib3 sets verify_mode on the context of every new connection, so
    each `verify` value gets its own context instead of sharing one.
    """

    __attrs__ = HTTPAdapter.__attrs__ + ["_tls_config"]

    def __init__(self, tls_config: TLSConfig | None = None, **kwargs):
        # HTTPAdapter.__init__ builds the pool manager, so the config must exist first
        self._tls_config = tls_config if tls_config is not None else TLSConfig()
        super().__init__(**kwargs)

    def get_tls_config(self) -> TLSConfig:
        return self._tls_config

    def set_tls_config(self, config: TLSConfig) -> None:
        self._tls_config = config
        # Rebuild pools so new connections use the new context
        self.poolmanager.clear()
        for manager in self.proxy_manager.values():
            manager.clear()
        self.proxy_manager = {}
        self.init_poolmanager(self._pool_connections, self._pool_maxsize, block=self._pool_block)

    def ssl_context_for(self, verify: bool | str) -> ssl.SSLContext:
        """Returns the cached context matching a requests `verify` value."""
        key = verify if isinstance(verify, str) else bool(verify)
        context = self._ssl_contexts.get(key)
        if context is None:
            if key is False:
                context = self._tls_config.build_ssl_context(cert_reqs=ssl.CERT_NONE)
            elif key is True:
                context = self._tls_config.build_ssl_context()
            else:
                # urllib3 loads the ca_certs / ca_cert_dir requests passes for a path
                context = self._tls_config.build_ssl_context(ca_bundle=None)
            self._ssl_contexts[key] = context
        return context

    def init_poolmanager(self, *args, **pool_kwargs):
        # Also runs on unpickling and after set_tls_config
        self._ssl_contexts = {}
        pool_kwargs["ssl_context"] = self.ssl_context_for(True)
        return super().init_poolmanager(*args, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        if proxy not in self.proxy_manager:
            proxy_kwargs["ssl_context"] = self.ssl_context_for(True)
        return super().proxy_manager_for(proxy, **proxy_kwargs)

    def build_connection_pool_key_attributes(self, request, verify, cert=None):
        host_params, pool_kwargs = super().build_connection_pool_key_attributes(request, verify, cert)
        pool_kwargs["ssl_context"] = self.ssl_context_for(verify)
        return host_params, pool_kwargs
