"""Send email CLI command.

Provides the send-email command with HTML, copies, attachments, inline
images and ZeptoMail tags/metadata.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    execute_with_email_error_handling,
    parse_metadata,
    resolve_zepto_config,
    zepto_config_options,
)

logger = logging.getLogger(__name__)


def _paths(raw: tuple[str, ...]) -> list[Path] | None:
    return [Path(p) for p in raw] if raw else None


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    required=False,
    help="Recipient email address (can specify multiple; uses config default if not specified)",
)
@click.option("--subject", required=True, help="Email subject line")
@click.option("--body", default="", help="Plain-text email body")
@click.option("--body-html", default="", help="HTML email body (sent as alternative to the plain text)")
@click.option(
    "--from", "from_address", default=None, help="Override sender address (uses config default if not specified)"
)
@click.option("--cc", multiple=True, help="Carbon-copy recipient (can specify multiple)")
@click.option("--bcc", multiple=True, help="Blind carbon-copy recipient (can specify multiple)")
@click.option("--reply-to", multiple=True, help="Reply-To address (can specify multiple)")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (can specify multiple)",
)
@click.option(
    "--inline-image",
    "inline_images",
    multiple=True,
    type=click.Path(path_type=str),
    help="Image embedded in the HTML body, referenced as cid:<file name> (can specify multiple)",
)
@click.option("--tag", default=None, help="ZeptoMail tag for this message")
@click.option(
    "--metadata",
    multiple=True,
    callback=parse_metadata,
    metavar="KEY=VALUE",
    help="ZeptoMail metadata entry (can specify multiple)",
)
@zepto_config_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    recipients: tuple[str, ...],
    subject: str,
    body: str,
    body_html: str,
    from_address: str | None,
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    reply_to: tuple[str, ...],
    attachments: tuple[str, ...],
    inline_images: tuple[str, ...],
    tag: str | None,
    metadata: dict[str, str],
    dsn: str | None,
    region: str | None,
    api_key: str | None,
    host: str | None,
    track_clicks: bool | None,
    track_opens: bool | None,
    timeout: float | None,
) -> None:
    """Send an email through the ZeptoMail API."""
    cli_ctx = get_cli_context(ctx)
    resolved_recipients = list(recipients) if recipients else None
    extra = {"command": "send-email", "recipients": resolved_recipients, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
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

        logger.info(
            "Sending email",
            extra={
                "recipients": resolved_recipients,
                "subject": subject,
                "has_html": bool(body_html),
                "attachment_count": len(attachments),
                "inline_image_count": len(inline_images),
            },
        )
        execute_with_email_error_handling(
            operation=functools.partial(
                cli_ctx.services.send_email,
                config=zepto_config,
                recipients=resolved_recipients,
                subject=subject,
                body=body,
                body_html=body_html,
                from_address=from_address,
                cc=list(cc) or None,
                bcc=list(bcc) or None,
                reply_to=list(reply_to) or None,
                attachments=_paths(attachments),
                inline_images=_paths(inline_images),
                tag=tag,
                metadata=metadata or None,
            ),
            recipients=resolved_recipients,
            message_type="Email",
            catches_file_not_found=True,
        )


__all__ = ["cli_send_email"]
