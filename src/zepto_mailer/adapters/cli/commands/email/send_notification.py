"""``send-notification``: a plain-text alert through ZeptoMail in one line.

Meant for cron jobs and monitoring hooks; recipients and sender usually
come from the ``[zepto]`` configuration section.
"""

from __future__ import annotations

import functools
import logging

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    execute_with_email_error_handling,
    resolve_zepto_config,
    zepto_config_options,
)

logger = logging.getLogger(__name__)


@click.command("send-notification", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    required=False,
    help="Recipient address, repeatable; defaults to zepto.recipients",
)
@click.option("--subject", required=True, help="Subject of the alert")
@click.option("--message", required=True, help="Plain-text body of the alert")
@click.option(
    "--from", "from_address", default=None, help="Sender address; defaults to zepto.from_address"
)
@zepto_config_options
@click.pass_context
def cli_send_notification(
    ctx: click.Context,
    recipients: tuple[str, ...],
    subject: str,
    message: str,
    from_address: str | None,
    dsn: str | None,
    region: str | None,
    api_key: str | None,
    host: str | None,
    track_clicks: bool | None,
    track_opens: bool | None,
    timeout: float | None,
) -> None:
    """Send a plain-text notification and print the ZeptoMail message id."""
    cli_ctx = get_cli_context(ctx)
    resolved_recipients = list(recipients) if recipients else None
    extra = {"command": "send-notification", "recipients": resolved_recipients, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-notification", extra=extra):
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

        logger.info("Sending notification", extra={"recipients": resolved_recipients, "subject": subject})
        execute_with_email_error_handling(
            operation=functools.partial(
                cli_ctx.services.send_notification,
                config=zepto_config,
                recipients=resolved_recipients,
                subject=subject,
                message=message,
                from_address=from_address,
            ),
            recipients=resolved_recipients,
            message_type="Notification",
        )


__all__ = ["cli_send_notification"]
