import os

import click

from sourcectl.cli.json_output import ApplyResponse, DesiredStateResponse, emit_error, emit_json
from sourcectl.cli.options import desired_state_options, json_option, source_identity_options
from sourcectl.cli.output import user_output
from sourcectl.core.context import SourceContext
from sourcectl.core.errors import SourceReconcileError
from sourcectl.core.types import DesiredState, Presence, SourceCredential, TrustPolicy
from sourcectl.registry.real import CREDENTIAL_PASSWORD_VAR


def _resolve_credential(username: str | None) -> SourceCredential | None:
    """Build a credential for username, reading the password from env or a prompt."""
    if username is None:
        return None
    password = os.environ.get(CREDENTIAL_PASSWORD_VAR)
    if password is None:
        password = click.prompt(f"Password for {username}", hide_input=True, err=True)
    return SourceCredential(username=username, password=password)


@click.command("set")
@source_identity_options
@desired_state_options
@click.option(
    "--credential-user",
    "credential_user",
    default=None,
    help=f"Register with a credential for this user (password from ${CREDENTIAL_PASSWORD_VAR} "
    "or prompt)",
)
@json_option
@click.pass_obj
def set_cmd(
    ctx: SourceContext,
    name: str,
    provider_name: str,
    source_location: str,
    presence: str,
    trust_policy: str,
    credential_user: str | None,
    as_json: bool,
) -> None:
    """Register or unregister a package source to match its desired state.

    Examples:

      sourcectl set -n MyFeed -p NuGet -l https://example/feed --trust Trusted

      sourcectl set -n MyFeed -p NuGet -l https://example/feed --ensure Absent
    """
    desired = DesiredState(
        name=name,
        provider_name=provider_name,
        source_location=source_location,
        presence=Presence(presence),
        credential=_resolve_credential(credential_user),
        trust_policy=TrustPolicy(trust_policy),
    )

    try:
        ctx.reconciler.apply(desired)
    except SourceReconcileError as e:
        if as_json:
            emit_error(e)
        else:
            user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    if ctx.dry_run:
        user_output(click.style("(dry run) no changes were made", dim=True))

    if as_json:
        response = ApplyResponse(
            dry_run=ctx.dry_run, desired=DesiredStateResponse.from_desired(desired)
        )
        emit_json(response.model_dump(mode="json"))
