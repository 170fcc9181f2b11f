"""Read, test and apply the registration state of a package source.

SourceReconciler is stateless: every call goes to the registry, and the
registry is the only place state lives. Callers (a configuration host or the
CLI) decide the order of calls; apply never re-reads, test is expected to be
called afterwards to confirm convergence.
"""

import logging
from collections.abc import Mapping

from sourcectl.core.errors import RegistrationFailedError, UnregistrationFailedError
from sourcectl.core.messages import DEFAULT_MESSAGES, MessageCatalog
from sourcectl.core.special_sources import DEFAULT_SPECIAL_SOURCES, SpecialSourceStrategy
from sourcectl.core.types import (
    DesiredState,
    DriftReason,
    DriftReport,
    ObservedState,
    Presence,
    TrustPolicy,
)
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.types import RegistrationRequest, UnregistrationRequest

logger = logging.getLogger(__name__)


def _require(value: str, argument: str) -> None:
    if not value:
        msg = f"{argument} is required"
        raise ValueError(msg)


def same_location(left: str, right: str) -> bool:
    """Compare source URIs ignoring case and a trailing slash."""
    return left.rstrip("/").casefold() == right.rstrip("/").casefold()


class SourceReconciler:
    """Converges one package source at a time against a registry.

    Example:
        reconciler = SourceReconciler(RealPackageSourceRegistry())
        desired = DesiredState("Foo", "NuGet", "https://example/feed")
        if not reconciler.test(desired):
            reconciler.apply(desired)
    """

    def __init__(
        self,
        registry: PackageSourceRegistry,
        *,
        messages: MessageCatalog = DEFAULT_MESSAGES,
        special_sources: Mapping[str, SpecialSourceStrategy] = DEFAULT_SPECIAL_SOURCES,
        force_bootstrap: bool = True,
    ) -> None:
        """Create a reconciler.

        Args:
            registry: Package source registry to read and change
            messages: Templates for log messages
            special_sources: Strategies for well-known sources, keyed by name
                (matched case-insensitively)
            force_bootstrap: Let the registry install missing providers on query
        """
        self._registry = registry
        self._messages = messages
        self._special_sources = {name.casefold(): s for name, s in special_sources.items()}
        self._force_bootstrap = force_bootstrap

    def read(self, name: str, provider_name: str, source_location: str) -> ObservedState:
        """Report the current registration state of a source.

        Registry errors are logged and reported as an absent source. The first
        registered match wins when the registry returns several.

        Raises:
            ValueError: If name, provider_name or source_location is empty
        """
        _require(name, "name")
        _require(provider_name, "provider_name")
        _require(source_location, "source_location")

        logger.debug(
            self._messages.format(
                "query_source", name=name, provider_name=provider_name, location=source_location
            )
        )
        try:
            matches = self._registry.query_sources(
                name, provider_name, source_location, force_bootstrap=self._force_bootstrap
            )
        except RuntimeError as e:
            logger.debug(self._messages.format("query_failed", name=name, detail=e))
            matches = []

        registered = next((match for match in matches if match.is_registered), None)
        if registered is None:
            logger.debug(
                self._messages.format("source_not_found", name=name, provider_name=provider_name)
            )
            return ObservedState.absent(name, provider_name)

        policy = TrustPolicy.from_flag(registered.is_trusted)
        logger.debug(
            self._messages.format(
                "source_found", name=name, location=registered.location, policy=policy
            )
        )
        return ObservedState(
            presence=Presence.PRESENT,
            name=name,
            provider_name=provider_name,
            source_location=registered.location,
            trust_policy=policy,
        )

    def evaluate(self, desired: DesiredState) -> DriftReport:
        """Compare current state with desired state and explain any drift."""
        observed = self.read(desired.name, desired.provider_name, desired.source_location)

        if observed.presence is not desired.presence:
            logger.debug(
                self._messages.format(
                    "presence_mismatch",
                    name=desired.name,
                    observed=observed.presence,
                    desired=desired.presence,
                )
            )
            return DriftReport(observed=observed, reason=DriftReason.PRESENCE_MISMATCH)

        if desired.presence is Presence.PRESENT:
            observed_location = observed.source_location or ""
            if not same_location(observed_location, desired.source_location):
                logger.debug(
                    self._messages.format(
                        "location_mismatch",
                        name=desired.name,
                        observed=observed_location,
                        desired=desired.source_location,
                    )
                )
                return DriftReport(observed=observed, reason=DriftReason.LOCATION_MISMATCH)

            if observed.trust_policy is not desired.trust_policy:
                logger.debug(
                    self._messages.format(
                        "trust_policy_mismatch",
                        name=desired.name,
                        observed=observed.trust_policy,
                        desired=desired.trust_policy,
                    )
                )
                return DriftReport(observed=observed, reason=DriftReason.TRUST_POLICY_MISMATCH)

        logger.debug(self._messages.format("in_desired_state", name=desired.name))
        return DriftReport(observed=observed)

    def test(self, desired: DesiredState) -> bool:
        """Return True when the source already matches desired state."""
        return self.evaluate(desired).in_desired_state

    def apply(self, desired: DesiredState) -> None:
        """Register or unregister the source to match desired state.

        Raises:
            RegistrationFailedError: If registering (Present) fails
            UnregistrationFailedError: If unregistering (Absent) fails
        """
        if desired.presence is Presence.PRESENT:
            self._register(desired)
        else:
            self._unregister(desired)

    def _register(self, desired: DesiredState) -> None:
        logger.warning(
            self._messages.format(
                "install_policy_warning",
                name=desired.name,
                provider_name=desired.provider_name,
                policy=desired.trust_policy,
            )
        )
        request = RegistrationRequest(
            name=desired.name,
            provider_name=desired.provider_name,
            location=desired.source_location,
            credential=desired.credential,
            trusted=desired.trust_policy.is_trusted,
        )

        strategy = self._special_sources.get(desired.name.casefold())
        try:
            if strategy is not None:
                strategy.converge(
                    self._registry,
                    request,
                    force_bootstrap=self._force_bootstrap,
                    messages=self._messages,
                )
            else:
                logger.debug(
                    self._messages.format(
                        "register_source", name=desired.name, location=desired.source_location
                    )
                )
                self._registry.register_source(request, force=True)
        except RuntimeError as e:
            raise RegistrationFailedError(desired.name, str(e)) from e

        logger.info(self._messages.format("register_succeeded", name=desired.name))

    def _unregister(self, desired: DesiredState) -> None:
        request = UnregistrationRequest(
            name=desired.name,
            provider_name=desired.provider_name,
            location=desired.source_location,
            credential=desired.credential,
        )
        logger.debug(self._messages.format("unregister_source", name=desired.name))
        try:
            self._registry.unregister_source(request, force=True)
        except RuntimeError as e:
            raise UnregistrationFailedError(desired.name, str(e)) from e

        logger.info(self._messages.format("unregister_succeeded", name=desired.name))
