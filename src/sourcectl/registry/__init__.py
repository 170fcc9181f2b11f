from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.dry_run import DryRunPackageSourceRegistry
from sourcectl.registry.fake import FakePackageSourceRegistry
from sourcectl.registry.real import RealPackageSourceRegistry
from sourcectl.registry.types import (
    PackageSourceInfo,
    RegistrationRequest,
    UnregistrationRequest,
)

__all__ = [
    "DryRunPackageSourceRegistry",
    "FakePackageSourceRegistry",
    "PackageSourceInfo",
    "PackageSourceRegistry",
    "RealPackageSourceRegistry",
    "RegistrationRequest",
    "UnregistrationRequest",
]
