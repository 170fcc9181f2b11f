"""Fake package source registry for testing.

FakePackageSourceRegistry is an in-memory implementation that keeps a list
of sources and records every call, enabling fast tests without pwsh.
"""

from dataclasses import replace

from sourcectl.core.types import TrustPolicy
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.types import (
    PackageSourceInfo,
    RegistrationRequest,
    UnregistrationRequest,
)


def _same_location(left: str, right: str) -> bool:
    return left.casefold().rstrip("/") == right.casefold().rstrip("/")


class FakePackageSourceRegistry(PackageSourceRegistry):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments. Error
    arguments make the matching operation raise RuntimeError with that
    message, the same way the real implementation surfaces pwsh failures.
    """

    def __init__(
        self,
        *,
        sources: list[PackageSourceInfo] | None = None,
        default_locations: dict[str, str] | None = None,
        query_error: str | None = None,
        register_error: str | None = None,
        unregister_error: str | None = None,
        update_error: str | None = None,
    ) -> None:
        """Create FakePackageSourceRegistry with pre-configured state.

        Args:
            sources: Initial registry contents, in query order
            default_locations: Location used when registering without one,
                keyed by case-folded source name
            query_error: Error raised by query_sources
            register_error: Error raised by register_source
            unregister_error: Error raised by unregister_source
            update_error: Error raised by update_gallery_source
        """
        self._sources = list(sources or [])
        self._default_locations = {k.casefold(): v for k, v in (default_locations or {}).items()}
        self._query_error = query_error
        self._register_error = register_error
        self._unregister_error = unregister_error
        self._update_error = update_error
        self._query_calls: list[tuple[str, str, str, bool]] = []
        self._register_calls: list[tuple[RegistrationRequest, bool]] = []
        self._unregister_calls: list[tuple[UnregistrationRequest, bool]] = []
        self._update_calls: list[tuple[str, str, TrustPolicy]] = []

    @property
    def sources(self) -> list[PackageSourceInfo]:
        """Current registry contents (copy, for test assertions)."""
        return list(self._sources)

    @property
    def query_calls(self) -> list[tuple[str, str, str, bool]]:
        """Returns list of (name, provider_name, location, force_bootstrap) tuples."""
        return self._query_calls

    @property
    def register_calls(self) -> list[tuple[RegistrationRequest, bool]]:
        """Returns list of (request, force) tuples."""
        return self._register_calls

    @property
    def unregister_calls(self) -> list[tuple[UnregistrationRequest, bool]]:
        """Returns list of (request, force) tuples."""
        return self._unregister_calls

    @property
    def update_calls(self) -> list[tuple[str, str, TrustPolicy]]:
        """Returns list of (name, location, trust_policy) tuples."""
        return self._update_calls

    def _index_of(self, name: str, provider_name: str | None) -> int | None:
        for index, source in enumerate(self._sources):
            if source.name.casefold() != name.casefold():
                continue
            if provider_name is not None and (
                source.provider_name.casefold() != provider_name.casefold()
            ):
                continue
            return index
        return None

    def query_sources(
        self,
        name: str,
        provider_name: str,
        location: str,
        *,
        force_bootstrap: bool,
    ) -> list[PackageSourceInfo]:
        self._query_calls.append((name, provider_name, location, force_bootstrap))
        if self._query_error is not None:
            raise RuntimeError(self._query_error)

        return [
            source
            for source in self._sources
            if source.name.casefold() == name.casefold()
            and source.provider_name.casefold() == provider_name.casefold()
            and _same_location(source.location, location)
        ]

    def register_source(self, request: RegistrationRequest, *, force: bool) -> None:
        self._register_calls.append((request, force))
        if self._register_error is not None:
            raise RuntimeError(self._register_error)

        location = request.location
        if location is None:
            location = self._default_locations.get(request.name.casefold())
        if location is None:
            msg = f"No location given for package source '{request.name}'"
            raise RuntimeError(msg)

        registered = PackageSourceInfo(
            name=request.name,
            location=location,
            provider_name=request.provider_name,
            is_registered=True,
            is_trusted=request.trusted,
        )
        index = self._index_of(request.name, request.provider_name)
        if index is None:
            self._sources.append(registered)
            return
        if not force:
            msg = f"Package source '{request.name}' already exists"
            raise RuntimeError(msg)
        self._sources[index] = registered

    def unregister_source(self, request: UnregistrationRequest, *, force: bool) -> None:
        self._unregister_calls.append((request, force))
        if self._unregister_error is not None:
            raise RuntimeError(self._unregister_error)

        index = self._index_of(request.name, request.provider_name)
        if index is not None:
            del self._sources[index]

    def update_gallery_source(self, name: str, location: str, trust_policy: TrustPolicy) -> None:
        self._update_calls.append((name, location, trust_policy))
        if self._update_error is not None:
            raise RuntimeError(self._update_error)

        index = self._index_of(name, None)
        if index is None:
            msg = f"Unable to find repository '{name}'"
            raise RuntimeError(msg)
        self._sources[index] = replace(
            self._sources[index], location=location, is_trusted=trust_policy.is_trusted
        )
