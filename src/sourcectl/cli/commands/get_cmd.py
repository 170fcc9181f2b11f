import click

from sourcectl.cli.json_output import ObservedStateResponse, emit_json
from sourcectl.cli.options import json_option, source_identity_options
from sourcectl.cli.rendering import render_observed_state
from sourcectl.core.context import SourceContext


@click.command("get")
@source_identity_options
@json_option
@click.pass_obj
def get_cmd(
    ctx: SourceContext, name: str, provider_name: str, source_location: str, as_json: bool
) -> None:
    """Show the current registration state of a package source."""
    observed = ctx.reconciler.read(name, provider_name, source_location)

    if as_json:
        emit_json(ObservedStateResponse.from_observed(observed).to_json_dict())
        return

    render_observed_state(observed)
