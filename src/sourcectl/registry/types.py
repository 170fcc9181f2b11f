"""Data types for the package source registry integration."""

from dataclasses import dataclass, replace

from sourcectl.core.types import SourceCredential


@dataclass(frozen=True)
class PackageSourceInfo:
    """A package source row as reported by the registry."""

    name: str
    location: str
    provider_name: str
    is_registered: bool
    is_trusted: bool


@dataclass(frozen=True)
class RegistrationRequest:
    """Arguments for registering a package source.

    Attributes:
        name: Source name
        provider_name: Provider that owns the source
        location: Source URI, None to let the provider use its built-in default
        credential: Optional credential for the source
        trusted: Whether packages from the source install without prompting
    """

    name: str
    provider_name: str
    location: str | None
    credential: SourceCredential | None
    trusted: bool

    def without_location(self) -> "RegistrationRequest":
        return replace(self, location=None)


@dataclass(frozen=True)
class UnregistrationRequest:
    """Arguments for unregistering a package source."""

    name: str
    provider_name: str
    location: str | None
    credential: SourceCredential | None
