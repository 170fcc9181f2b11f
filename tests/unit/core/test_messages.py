import pytest

from sourcectl.core.messages import DEFAULT_MESSAGES
from sourcectl.core.types import TrustPolicy


def test_format_renders_template() -> None:
    message = DEFAULT_MESSAGES.format("register_succeeded", name="Foo")

    assert message == "Registered package source 'Foo'"


def test_format_renders_enum_values_as_text() -> None:
    message = DEFAULT_MESSAGES.format(
        "install_policy_warning",
        name="Foo",
        provider_name="NuGet",
        policy=TrustPolicy.UNTRUSTED,
    )

    assert "installation policy Untrusted" in message


def test_unknown_key_raises() -> None:
    with pytest.raises(KeyError):
        DEFAULT_MESSAGES.format("no_such_message")


def test_with_overrides_replaces_template_without_touching_default() -> None:
    localized = DEFAULT_MESSAGES.with_overrides(
        {"register_succeeded": "Paketquelle '{name}' registriert"}
    )

    assert localized.format("register_succeeded", name="Foo") == "Paketquelle 'Foo' registriert"
    assert DEFAULT_MESSAGES.format("register_succeeded", name="Foo") == (
        "Registered package source 'Foo'"
    )


def test_with_overrides_rejects_unknown_ids() -> None:
    with pytest.raises(ValueError, match="Unknown message ids: bogus"):
        DEFAULT_MESSAGES.with_overrides({"bogus": "x"})


def test_with_overrides_rejects_unknown_placeholder() -> None:
    with pytest.raises(ValueError, match="Unknown placeholders in message 'query_source': nme"):
        DEFAULT_MESSAGES.with_overrides({"query_source": "Query {nme}"})


def test_with_overrides_rejects_unbalanced_braces() -> None:
    with pytest.raises(ValueError, match="Invalid template for message 'in_desired_state'"):
        DEFAULT_MESSAGES.with_overrides({"in_desired_state": "{name ok"})


def test_with_overrides_allows_subset_of_placeholders() -> None:
    localized = DEFAULT_MESSAGES.with_overrides({"query_source": "Abfrage {name}"})

    assert (
        localized.format("query_source", name="Foo", provider_name="NuGet", location="x")
        == "Abfrage Foo"
    )
