"""Alternate convergence strategies for well-known package sources.

Some built-in sources cannot be registered from a blank slate through the
generic Register-PackageSource path. The reconciler looks up the source name
(case-folded) in a strategy table and lets the strategy converge it instead.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType

from sourcectl.core.messages import MessageCatalog
from sourcectl.core.types import TrustPolicy
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.types import RegistrationRequest

logger = logging.getLogger(__name__)


class SpecialSourceStrategy(ABC):
    """Registers a well-known source the generic register path cannot handle."""

    @abstractmethod
    def converge(
        self,
        registry: PackageSourceRegistry,
        request: RegistrationRequest,
        *,
        force_bootstrap: bool,
        messages: MessageCatalog,
    ) -> None:
        """Bring the source to the registered state described by request.

        Raises:
            RuntimeError: If the registry reports an error
        """
        ...


class GallerySourceStrategy(SpecialSourceStrategy):
    """Convergence for the default PowerShell Gallery.

    An existing gallery registration is updated in place. A missing one is
    re-created through the generic register path with the location left out,
    so the provider falls back to its built-in gallery URI.
    """

    def converge(
        self,
        registry: PackageSourceRegistry,
        request: RegistrationRequest,
        *,
        force_bootstrap: bool,
        messages: MessageCatalog,
    ) -> None:
        location = request.location or ""
        policy = TrustPolicy.from_flag(request.trusted)

        if self._is_registered(registry, request, location, force_bootstrap, messages):
            logger.debug(messages.format("update_gallery_source", name=request.name, policy=policy))
            registry.update_gallery_source(request.name, location, policy)
            return

        logger.debug(
            messages.format("register_source", name=request.name, location="<provider default>")
        )
        registry.register_source(request.without_location(), force=True)

    def _is_registered(
        self,
        registry: PackageSourceRegistry,
        request: RegistrationRequest,
        location: str,
        force_bootstrap: bool,
        messages: MessageCatalog,
    ) -> bool:
        # A failed lookup counts as not registered, same as read().
        try:
            existing = registry.query_sources(
                request.name, request.provider_name, location, force_bootstrap=force_bootstrap
            )
        except RuntimeError as e:
            logger.debug(messages.format("query_failed", name=request.name, detail=str(e)))
            return False
        return any(source.is_registered for source in existing)


DEFAULT_SPECIAL_SOURCES: Mapping[str, SpecialSourceStrategy] = MappingProxyType(
    {"psgallery": GallerySourceStrategy()}
)
