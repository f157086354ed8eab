"""Configuration display CLI command.

Contents:
    * :func:`cli_config` - Display the merged configuration, secrets masked.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from lib_layered_config import Config

from zepto_mailer.adapters.config.overrides import apply_overrides
from zepto_mailer.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only a specific configuration section (e.g., 'zepto')",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Override profile from root command (e.g., 'eu', 'staging')",
)
@click.option(
    "--default-path",
    is_flag=True,
    default=False,
    help="Print the location of the bundled defaultconfig.toml and exit",
)
@click.pass_context
def cli_config(
    ctx: click.Context,
    output_format: str,
    section: str | None,
    profile: str | None,
    default_path: bool,
) -> None:
    """Display the current merged configuration from all sources.

    Precedence: defaults -> app -> host -> user -> dotenv -> env.
    ``zepto.api_key`` and the password in ``zepto.dsn`` are masked.
    """
    cli_ctx = get_cli_context(ctx)
    if default_path:
        click.echo(str(cli_ctx.services.get_default_config_path()))
        return

    effective_config, effective_profile = _resolve_config(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info(
            "Displaying configuration",
            extra={"format": fmt.value, "section": section, "profile": effective_profile},
        )
        click.echo()
        try:
            cli_ctx.services.display_config(
                effective_config, output_format=fmt, section=section, profile=effective_profile
            )
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


def _resolve_config(cli_ctx: CLIContext, profile: str | None) -> tuple[Config, str | None]:
    """Return the context config, or reload it for a subcommand-level profile.

    Root-level ``--set`` overrides are reapplied after a reload.
    """
    if not profile:
        return cli_ctx.config, cli_ctx.profile
    config = cli_ctx.services.get_config(profile=profile)
    return apply_overrides(config, cli_ctx.set_overrides), profile


__all__ = ["cli_config"]
