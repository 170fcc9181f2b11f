"""Data types for package source reconciliation."""

from dataclasses import dataclass, field
from enum import StrEnum


class _CaseInsensitiveEnum(StrEnum):
    """StrEnum that accepts any casing of a member value on lookup."""

    @classmethod
    def _missing_(cls, value: object) -> "_CaseInsensitiveEnum | None":
        if isinstance(value, str):
            folded = value.casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


class Presence(_CaseInsensitiveEnum):
    """Whether a package source should be (or is) registered."""

    PRESENT = "Present"
    ABSENT = "Absent"


class TrustPolicy(_CaseInsensitiveEnum):
    """Installation policy for packages coming from a source."""

    TRUSTED = "Trusted"
    UNTRUSTED = "Untrusted"

    @staticmethod
    def from_flag(is_trusted: bool) -> "TrustPolicy":
        return TrustPolicy.TRUSTED if is_trusted else TrustPolicy.UNTRUSTED

    @property
    def is_trusted(self) -> bool:
        return self is TrustPolicy.TRUSTED


class DriftReason(StrEnum):
    """Why an observed source does not match its desired state."""

    PRESENCE_MISMATCH = "presence_mismatch"
    LOCATION_MISMATCH = "location_mismatch"
    TRUST_POLICY_MISMATCH = "trust_policy_mismatch"


@dataclass(frozen=True)
class SourceCredential:
    """Opaque credential handed through to the registry.

    The password is excluded from repr so it never shows up in logs or
    tracebacks.
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class DesiredState:
    """Desired registration state of a single package source.

    Attributes:
        name: Source name (resource key)
        provider_name: Package provider backing the source (e.g., "NuGet")
        source_location: Source URI
        presence: Whether the source should be registered
        credential: Optional credential used only for registration calls
        trust_policy: Installation policy to register the source with
    """

    name: str
    provider_name: str
    source_location: str
    presence: Presence = Presence.PRESENT
    credential: SourceCredential | None = None
    trust_policy: TrustPolicy = TrustPolicy.UNTRUSTED


@dataclass(frozen=True)
class ObservedState:
    """Registration state reported by the registry.

    source_location and trust_policy are only set when presence is PRESENT.
    """

    presence: Presence
    name: str
    provider_name: str
    source_location: str | None = None
    trust_policy: TrustPolicy | None = None

    def __post_init__(self) -> None:
        if self.presence is Presence.ABSENT and (
            self.source_location is not None or self.trust_policy is not None
        ):
            msg = "Absent source cannot carry source_location or trust_policy"
            raise ValueError(msg)

    @staticmethod
    def absent(name: str, provider_name: str) -> "ObservedState":
        return ObservedState(presence=Presence.ABSENT, name=name, provider_name=provider_name)


@dataclass(frozen=True)
class DriftReport:
    """Outcome of comparing observed state against desired state.

    Attributes:
        observed: State returned by read
        reason: First mismatch found, or None when in desired state
    """

    observed: ObservedState
    reason: DriftReason | None = None

    @property
    def in_desired_state(self) -> bool:
        return self.reason is None
