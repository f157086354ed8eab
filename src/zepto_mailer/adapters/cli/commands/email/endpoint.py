"""Show the transport the current configuration resolves to."""

from __future__ import annotations

import lib_log_rich.runtime
import rich_click as click

from zepto_mailer.domain.errors import ConfigurationError

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import resolve_zepto_config, zepto_config_options


@click.command("endpoint", context_settings=CLICK_CONTEXT_SETTINGS)
@zepto_config_options
@click.pass_context
def cli_endpoint(
    ctx: click.Context,
    dsn: str | None,
    region: str | None,
    api_key: str | None,
    host: str | None,
    track_clicks: bool | None,
    track_opens: bool | None,
    timeout: float | None,
) -> None:
    """Print the ZeptoMail endpoint, e.g. ``zepto+api://api.zeptomail.eu/v1.1/email``.

    Nothing is sent; the API key is never printed.
    """
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-endpoint", extra={"command": "endpoint"}):
        zepto_config = resolve_zepto_config(
            cli_ctx.config,
            cli_ctx.services.load_zepto_config_from_dict,
            dsn=dsn,
            region=region,
            api_key=api_key,
            host=host,
            track_clicks=track_clicks,
            track_opens=track_opens,
            timeout=timeout,
        )
        try:
            transport = cli_ctx.services.create_transport(zepto_config)
        except ConfigurationError as exc:
            click.echo(f"\nError: Configuration error - {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc
        with transport:
            click.echo(str(transport))


__all__ = ["cli_endpoint"]
