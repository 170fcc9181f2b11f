"""No-op wrapper for package source registry operations."""

import logging

from sourcectl.core.types import TrustPolicy
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.types import (
    PackageSourceInfo,
    RegistrationRequest,
    UnregistrationRequest,
)

logger = logging.getLogger(__name__)


class DryRunPackageSourceRegistry(PackageSourceRegistry):
    """No-op wrapper that prevents execution of registry changes.

    Queries are delegated to the wrapped implementation. Register, unregister
    and gallery updates are logged and skipped.

    Usage:
        real_ops = RealPackageSourceRegistry()
        noop_ops = DryRunPackageSourceRegistry(real_ops)

        # Logs instead of running Register-PackageSource
        noop_ops.register_source(request, force=True)
    """

    def __init__(self, wrapped: PackageSourceRegistry) -> None:
        """Create a dry-run wrapper around a registry implementation.

        Args:
            wrapped: The registry to wrap (usually RealPackageSourceRegistry)
        """
        self._wrapped = wrapped

    def query_sources(
        self,
        name: str,
        provider_name: str,
        location: str,
        *,
        force_bootstrap: bool,
    ) -> list[PackageSourceInfo]:
        """Query sources (read-only, delegates to wrapped)."""
        return self._wrapped.query_sources(
            name, provider_name, location, force_bootstrap=force_bootstrap
        )

    def register_source(self, request: RegistrationRequest, *, force: bool) -> None:
        """No-op for Register-PackageSource in dry-run mode."""
        logger.info(
            "[DRY RUN] Would register package source '%s' (provider %s, location %s, trusted=%s)",
            request.name,
            request.provider_name,
            request.location or "<provider default>",
            request.trusted,
        )

    def unregister_source(self, request: UnregistrationRequest, *, force: bool) -> None:
        """No-op for Unregister-PackageSource in dry-run mode."""
        logger.info(
            "[DRY RUN] Would unregister package source '%s' (provider %s)",
            request.name,
            request.provider_name,
        )

    def update_gallery_source(self, name: str, location: str, trust_policy: TrustPolicy) -> None:
        """No-op for Set-PSRepository in dry-run mode."""
        logger.info(
            "[DRY RUN] Would update gallery source '%s' (location %s, policy %s)",
            name,
            location,
            trust_policy.value,
        )
