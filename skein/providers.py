"""
Invariant Providers — optional richer-invariant capability

skein computes crossing number, writhe and a content hash on its own.
Anything richer (Jones polynomial, conversion to a planar diagram type
of another library) comes from a provider registered here. There is one
slot; an empty slot is a normal state, not an error.

A provider can be registered in code:

    from skein import providers
    providers.register_provider(MyProvider())

or shipped by another distribution under the "skein.providers" entry
point group, which is loaded lazily on first use.
"""

import logging
from importlib.metadata import entry_points
from typing import Any, Optional

from skein.errors import ProviderUnavailableError
from skein.gauss_code import GaussCode

log = logging.getLogger("skein.providers")

ENTRY_POINT_GROUP = "skein.providers"

_provider = None
_discovered = False  # entry points scanned once


class InvariantProvider:
    """
    Base class for richer-invariant providers.

    Subclasses override the hooks they support; the defaults raise
    NotImplementedError.
    """

    name = "provider"

    def to_external(self, g: GaussCode) -> Any:
        """Convert a GaussCode into the provider's diagram type."""
        raise NotImplementedError

    def from_external(self, diagram: Any) -> GaussCode:
        """Convert the provider's diagram type back into a GaussCode."""
        raise NotImplementedError

    def jones_polynomial(self, g: GaussCode) -> str:
        """Jones polynomial of the diagram, as text."""
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


def _discover():
    """Load the first provider advertised under the entry point group."""
    global _provider, _discovered
    if _discovered:
        return
    _discovered = True
    if _provider is not None:
        return
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            factory = ep.load()
        except ImportError as e:
            log.debug(f"PROVIDERS: {ep.name} not importable: {e}")
            continue
        _provider = factory()
        log.info(f"PROVIDERS: loaded {_provider!r} from entry point {ep.name}")
        return


def register_provider(provider: InvariantProvider) -> None:
    """Fill the provider slot, replacing any earlier provider."""
    global _provider, _discovered
    _provider = provider
    _discovered = True
    log.info(f"PROVIDERS: registered {provider!r}")


def unregister_provider() -> None:
    """Empty the provider slot. Entry points are not rescanned."""
    global _provider, _discovered
    _provider = None
    _discovered = True


def get_provider() -> Optional[InvariantProvider]:
    _discover()
    return _provider


def is_available() -> bool:
    """Check whether a provider is registered. Triggers lazy discovery."""
    return get_provider() is not None


def richer_invariant(g: GaussCode) -> Optional[str]:
    """
    Jones polynomial from the provider, or None when no provider is
    registered or the provider lacks the hook. Any other error raised by
    the provider propagates.
    """
    provider = get_provider()
    if provider is None:
        return None
    try:
        return provider.jones_polynomial(g)
    except NotImplementedError:
        return None
    except Exception as e:
        log.error(f"PROVIDERS: {provider!r} failed on {g!r}: {e}")
        raise


def to_external(g: GaussCode) -> Any:
    provider = get_provider()
    if provider is None:
        raise ProviderUnavailableError("No invariant provider registered")
    return provider.to_external(g)


def from_external(diagram: Any) -> GaussCode:
    provider = get_provider()
    if provider is None:
        raise ProviderUnavailableError("No invariant provider registered")
    return provider.from_external(diagram)
