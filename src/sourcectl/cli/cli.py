import click

from sourcectl.cli.commands.config_cmd import config_group
from sourcectl.cli.commands.get_cmd import get_cmd
from sourcectl.cli.commands.set_cmd import set_cmd
from sourcectl.cli.commands.test_cmd import test_cmd
from sourcectl.cli.logging_setup import configure_logging
from sourcectl.cli.output import user_output
from sourcectl.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="sourcectl")
@click.option("--dry-run", is_flag=True, help="Report registry changes without making them.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool, verbose: bool) -> None:
    """Manage package source registrations declaratively (get, test, set)."""
    configure_logging(verbose=verbose)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(dry_run=dry_run)
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e


cli.add_command(get_cmd)
cli.add_command(test_cmd)
cli.add_command(set_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `sourcectl` console script."""
    cli()
