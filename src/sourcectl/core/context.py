"""Application context with dependency injection."""

from dataclasses import dataclass

from sourcectl.core.config import ConfigStore, FilesystemConfigStore, SourceConfig
from sourcectl.core.messages import DEFAULT_MESSAGES, MessageCatalog
from sourcectl.core.reconciler import SourceReconciler
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.dry_run import DryRunPackageSourceRegistry
from sourcectl.registry.real import RealPackageSourceRegistry


@dataclass(frozen=True)
class SourceContext:
    """Immutable context holding all dependencies for sourcectl operations.

    Created at CLI entry point and threaded through commands via click's obj.
    """

    registry: PackageSourceRegistry
    config_store: ConfigStore
    config: SourceConfig
    messages: MessageCatalog
    dry_run: bool

    @property
    def reconciler(self) -> SourceReconciler:
        return SourceReconciler(
            self.registry,
            messages=self.messages,
            force_bootstrap=self.config.force_bootstrap,
        )

    @staticmethod
    def for_test(
        registry: PackageSourceRegistry | None = None,
        config_store: ConfigStore | None = None,
        config: SourceConfig | None = None,
        dry_run: bool = False,
    ) -> "SourceContext":
        """Create test context with fake defaults for anything not given.

        Example:
            >>> registry = FakePackageSourceRegistry(sources=[...])
            >>> ctx = SourceContext.for_test(registry=registry)
        """
        from sourcectl.core.config import InMemoryConfigStore
        from sourcectl.registry.fake import FakePackageSourceRegistry

        if registry is None:
            registry = FakePackageSourceRegistry()

        if config is None:
            config = SourceConfig()

        if config_store is None:
            config_store = InMemoryConfigStore(config=config)

        if dry_run:
            registry = DryRunPackageSourceRegistry(registry)

        return SourceContext(
            registry=registry,
            config_store=config_store,
            config=config,
            messages=DEFAULT_MESSAGES.with_overrides(config.messages),
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, config_store: ConfigStore | None = None) -> SourceContext:
    """Create production context with real implementations.

    Args:
        dry_run: If True, wrap the registry so changes are logged, not made
        config_store: Config store to load from (defaults to ~/.sourcectl)

    Raises:
        ValueError: If the config file or its message overrides are malformed
    """
    if config_store is None:
        config_store = FilesystemConfigStore()
    config = config_store.load_or_default()

    registry: PackageSourceRegistry = RealPackageSourceRegistry(config.powershell_executable)
    if dry_run:
        registry = DryRunPackageSourceRegistry(registry)

    return SourceContext(
        registry=registry,
        config_store=config_store,
        config=config,
        messages=DEFAULT_MESSAGES.with_overrides(config.messages),
        dry_run=dry_run,
    )
