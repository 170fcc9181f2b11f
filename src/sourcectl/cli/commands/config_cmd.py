"""Config command group."""

import click

from sourcectl.cli.json_output import emit_json
from sourcectl.cli.output import machine_output, user_output
from sourcectl.core.context import SourceContext


@click.group("config")
def config_group() -> None:
    """Show or change sourcectl configuration."""
    pass


@config_group.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output JSON to stdout")
@click.pass_obj
def show_config(ctx: SourceContext, as_json: bool) -> None:
    """Print the effective configuration."""
    config = ctx.config
    if as_json:
        emit_json(
            {
                "path": str(ctx.config_store.path()),
                "powershell_executable": config.powershell_executable,
                "force_bootstrap": config.force_bootstrap,
                "messages": dict(config.messages),
            }
        )
        return

    if not ctx.config_store.exists():
        user_output(f"# {ctx.config_store.path()} does not exist, showing defaults")
    machine_output(f"powershell_executable={config.powershell_executable}")
    machine_output(f"force_bootstrap={str(config.force_bootstrap).lower()}")
    for key, template in sorted(config.messages.items()):
        machine_output(f"messages.{key}={template}")


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def set_config(ctx: SourceContext, key: str, value: str) -> None:
    """Set a configuration KEY to VALUE.

    Valid keys: powershell_executable, force_bootstrap.
    """
    try:
        updated = ctx.config.with_value(key, value)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    ctx.config_store.save(updated)
    user_output(f"Set {key}={value} in {ctx.config_store.path()}")
