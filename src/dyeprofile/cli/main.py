"""DyeProfile CLI — top-level Click group and interactive prompts."""

from __future__ import annotations

import sys

import click


def _is_interactive() -> bool:
    """True when stdin is a terminal a person can answer prompts on."""
    return sys.stdin.isatty()


@click.group(invoke_without_command=True)
@click.version_option(package_name="dyeprofile")
@click.option("--verbose", "-v", is_flag=True, help="Show full tracebacks on errors.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """DyeProfile — replicate dye-gradient images to channel profiles."""
    from dyeprofile.cli import utils

    utils.verbose = verbose

    if ctx.invoked_subcommand is None:
        if not _is_interactive():
            click.echo(ctx.get_help())
            return

        from dyeprofile.cli.prompts import run_interactive

        run_interactive()


def _register_commands() -> None:
    """Register all subcommands — imports deferred to avoid loading heavy deps at startup."""
    from dyeprofile.cli.config_cmd import init_config
    from dyeprofile.cli.front import front
    from dyeprofile.cli.profile import profile

    cli.add_command(front)
    cli.add_command(init_config)
    cli.add_command(profile)


_register_commands()
