"""CLI tests for sourcectl set."""

import json

from click.testing import CliRunner

from sourcectl.cli.cli import cli
from sourcectl.core.context import SourceContext
from sourcectl.core.types import SourceCredential
from sourcectl.registry.fake import FakePackageSourceRegistry
from sourcectl.registry.real import CREDENTIAL_PASSWORD_VAR
from sourcectl.registry.types import PackageSourceInfo

BASE = ["set", "--name", "Foo", "--provider", "ProviderX", "--location", "http://example/feed"]


def test_set_registers_source_and_warns() -> None:
    registry = FakePackageSourceRegistry()
    ctx = SourceContext.for_test(registry=registry)

    result = CliRunner().invoke(cli, [*BASE, "--trust", "Trusted"], obj=ctx)

    assert result.exit_code == 0
    assert registry.sources == [
        PackageSourceInfo(
            name="Foo",
            location="http://example/feed",
            provider_name="ProviderX",
            is_registered=True,
            is_trusted=True,
        )
    ]
    assert "Warning: " in result.stderr
    assert "Registered package source 'Foo'" in result.stderr


def test_set_absent_unregisters_source() -> None:
    registry = FakePackageSourceRegistry(
        sources=[
            PackageSourceInfo(
                name="Foo",
                location="http://example/feed",
                provider_name="ProviderX",
                is_registered=True,
                is_trusted=False,
            )
        ]
    )
    ctx = SourceContext.for_test(registry=registry)

    result = CliRunner().invoke(cli, [*BASE, "--ensure", "Absent"], obj=ctx)

    assert result.exit_code == 0
    assert registry.sources == []
    assert "Warning: " not in result.stderr


def test_set_failure_prints_error_and_exits_one() -> None:
    ctx = SourceContext.for_test(registry=FakePackageSourceRegistry(register_error="nope"))

    result = CliRunner().invoke(cli, BASE, obj=ctx)

    assert result.exit_code == 1
    assert "Error: Failed to register package source 'Foo': nope" in result.stderr


def test_set_failure_as_json() -> None:
    ctx = SourceContext.for_test(registry=FakePackageSourceRegistry(unregister_error="denied"))

    result = CliRunner().invoke(cli, [*BASE, "--ensure", "Absent", "--json"], obj=ctx)

    assert result.exit_code == 1
    assert json.loads(result.stdout) == {
        "error": "Failed to unregister package source 'Foo': denied",
        "error_type": "UnregistrationFailedError",
        "exit_code": 1,
    }


def test_set_reads_credential_password_from_environment() -> None:
    registry = FakePackageSourceRegistry()
    ctx = SourceContext.for_test(registry=registry)

    result = CliRunner().invoke(
        cli,
        [*BASE, "--credential-user", "svc"],
        obj=ctx,
        env={CREDENTIAL_PASSWORD_VAR: "s3cret"},
    )

    assert result.exit_code == 0
    request, _ = registry.register_calls[0]
    assert request.credential == SourceCredential(username="svc", password="s3cret")
    assert "s3cret" not in result.output


def test_set_prompts_for_credential_password() -> None:
    registry = FakePackageSourceRegistry()
    ctx = SourceContext.for_test(registry=registry)

    result = CliRunner().invoke(
        cli,
        [*BASE, "--credential-user", "svc"],
        obj=ctx,
        input="typed-secret\n",
        env={CREDENTIAL_PASSWORD_VAR: None},
    )

    assert result.exit_code == 0
    request, _ = registry.register_calls[0]
    assert request.credential == SourceCredential(username="svc", password="typed-secret")


def test_set_dry_run_leaves_registry_untouched() -> None:
    registry = FakePackageSourceRegistry()
    ctx = SourceContext.for_test(registry=registry, dry_run=True)

    result = CliRunner().invoke(cli, BASE, obj=ctx)

    assert result.exit_code == 0
    assert registry.sources == []
    assert registry.register_calls == []
    assert "[DRY RUN] Would register package source 'Foo'" in result.stderr
    assert "(dry run) no changes were made" in result.stderr


def test_set_json_reports_applied_state() -> None:
    registry = FakePackageSourceRegistry()
    ctx = SourceContext.for_test(registry=registry)

    result = CliRunner().invoke(
        cli,
        [*BASE, "--trust", "trusted", "--credential-user", "svc", "--json"],
        obj=ctx,
        env={CREDENTIAL_PASSWORD_VAR: "s3cret"},
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "applied": True,
        "dry_run": False,
        "desired": {
            "name": "Foo",
            "provider_name": "ProviderX",
            "source_location": "http://example/feed",
            "presence": "Present",
            "trust_policy": "Trusted",
        },
    }
    assert "s3cret" not in result.stdout


def test_set_json_marks_dry_run() -> None:
    ctx = SourceContext.for_test(dry_run=True)

    result = CliRunner().invoke(cli, [*BASE, "--ensure", "absent", "--json"], obj=ctx)

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["dry_run"] is True
    assert data["desired"]["presence"] == "Absent"
