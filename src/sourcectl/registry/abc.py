"""Package source registry operations interface.

This module defines the abstract interface over the host's package-source
registry, following the ops pattern with ABC-based dependency injection for
testability. Real implementations drive the PackageManagement cmdlets
through pwsh; fake implementations are pure in-memory for unit tests.
"""

from abc import ABC, abstractmethod

from sourcectl.core.types import TrustPolicy
from sourcectl.registry.types import (
    PackageSourceInfo,
    RegistrationRequest,
    UnregistrationRequest,
)


class PackageSourceRegistry(ABC):
    """Abstract interface for package source registry operations."""

    @abstractmethod
    def query_sources(
        self,
        name: str,
        provider_name: str,
        location: str,
        *,
        force_bootstrap: bool,
    ) -> list[PackageSourceInfo]:
        """Find sources matching name, provider and location.

        Args:
            name: Source name
            provider_name: Provider that owns the source
            location: Source URI
            force_bootstrap: Install the provider without prompting if missing

        Returns:
            Matching sources in registry order, empty list if none match

        Raises:
            RuntimeError: If the registry could not be queried
        """
        ...

    @abstractmethod
    def register_source(self, request: RegistrationRequest, *, force: bool) -> None:
        """Register (or overwrite) a package source.

        Args:
            request: Registration arguments
            force: Overwrite an existing registration without prompting

        Raises:
            RuntimeError: If the registry reports an error
        """
        ...

    @abstractmethod
    def unregister_source(self, request: UnregistrationRequest, *, force: bool) -> None:
        """Unregister a package source.

        Args:
            request: Unregistration arguments
            force: Skip confirmation prompts

        Raises:
            RuntimeError: If the registry reports an error
        """
        ...

    @abstractmethod
    def update_gallery_source(self, name: str, location: str, trust_policy: TrustPolicy) -> None:
        """Update an existing gallery repository registration in place.

        Used for well-known gallery sources that cannot be re-registered
        from scratch through the generic register path.

        Args:
            name: Gallery source name
            location: Source URI
            trust_policy: Installation policy to set

        Raises:
            RuntimeError: If the registry reports an error
        """
        ...
