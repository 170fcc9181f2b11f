"""Shared click options for the resource commands."""

from collections.abc import Callable
from typing import Any, TypeVar

import click

from sourcectl.core.types import Presence, TrustPolicy

F = TypeVar("F", bound=Callable[..., Any])


def source_identity_options(func: F) -> F:
    """Add --name, --provider and --location (the lookup triple)."""
    func = click.option(
        "--location",
        "-l",
        "source_location",
        required=True,
        help="Source URI, e.g. https://www.nuget.org/api/v2",
    )(func)
    func = click.option(
        "--provider",
        "-p",
        "provider_name",
        required=True,
        help="Package provider that owns the source, e.g. NuGet",
    )(func)
    func = click.option("--name", "-n", required=True, help="Package source name")(func)
    return func


def desired_state_options(func: F) -> F:
    """Add --ensure and --trust."""
    func = click.option(
        "--trust",
        "trust_policy",
        type=click.Choice([p.value for p in TrustPolicy], case_sensitive=False),
        default=TrustPolicy.UNTRUSTED.value,
        show_default=True,
        help="Installation policy for packages from the source",
    )(func)
    func = click.option(
        "--ensure",
        "presence",
        type=click.Choice([p.value for p in Presence], case_sensitive=False),
        default=Presence.PRESENT.value,
        show_default=True,
        help="Whether the source should be registered",
    )(func)
    return func


def json_option(func: F) -> F:
    return click.option("--json", "as_json", is_flag=True, help="Output JSON to stdout")(func)
