import pytest

from sourcectl.core.types import (
    DesiredState,
    DriftReason,
    DriftReport,
    ObservedState,
    Presence,
    SourceCredential,
    TrustPolicy,
)


@pytest.mark.parametrize("raw", ["Present", "present", "PRESENT"])
def test_presence_parses_any_casing(raw: str) -> None:
    assert Presence(raw) is Presence.PRESENT


def test_trust_policy_parses_any_casing() -> None:
    assert TrustPolicy("trusted") is TrustPolicy.TRUSTED
    assert TrustPolicy("UNTRUSTED") is TrustPolicy.UNTRUSTED


def test_unknown_enum_value_is_rejected() -> None:
    with pytest.raises(ValueError):
        Presence("Maybe")


def test_trust_policy_flag_round_trip() -> None:
    assert TrustPolicy.from_flag(True) is TrustPolicy.TRUSTED
    assert TrustPolicy.from_flag(False) is TrustPolicy.UNTRUSTED
    assert TrustPolicy.TRUSTED.is_trusted is True
    assert TrustPolicy.UNTRUSTED.is_trusted is False


def test_desired_state_defaults() -> None:
    desired = DesiredState(name="Foo", provider_name="NuGet", source_location="http://x")

    assert desired.presence is Presence.PRESENT
    assert desired.trust_policy is TrustPolicy.UNTRUSTED
    assert desired.credential is None


def test_absent_observed_state_cannot_carry_location() -> None:
    with pytest.raises(ValueError, match="Absent source"):
        ObservedState(
            presence=Presence.ABSENT,
            name="Foo",
            provider_name="NuGet",
            source_location="http://x",
        )


def test_credential_repr_hides_password() -> None:
    credential = SourceCredential(username="svc", password="s3cret")

    assert "s3cret" not in repr(credential)
    assert "s3cret" not in repr(
        DesiredState(
            name="Foo", provider_name="NuGet", source_location="http://x", credential=credential
        )
    )


def test_drift_report_in_desired_state_follows_reason() -> None:
    observed = ObservedState.absent("Foo", "NuGet")

    assert DriftReport(observed=observed).in_desired_state is True
    assert (
        DriftReport(observed=observed, reason=DriftReason.PRESENCE_MISMATCH).in_desired_state
        is False
    )
