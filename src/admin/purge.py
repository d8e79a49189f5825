# src/admin/purge.py — v1
"""Purge-cache admin page.

GET renders the form. POST with action=purge and a valid edit token
deletes every tracked entry in the gateway namespace.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel

from embedlrmi.admin.tokens import EditTokenSigner
from embedlrmi.core.errors import CacheUnavailableError, PermissionDeniedError
from embedlrmi.gateway.metadata_gateway import MetadataCacheGateway
from embedlrmi.logging.context import set_action_context
from embedlrmi.render.messages import msg
from embedlrmi.render.views import error_box, render_purge_form, success_box

logger = logging.getLogger(__name__)

PURGE_PERMISSION = "purgelrmicache"


class AdminRequest(BaseModel):
    """Incoming request to the purge page, as seen by the host."""

    method: Literal["GET", "POST"] = "GET"
    action: str | None = None
    token: str | None = None
    session_id: str
    can_purge: bool = False


class PurgeResult(BaseModel):
    """Rendered page plus what happened."""

    html: str
    purged: bool = False
    deleted: int = 0


class PurgeCachePage:
    """Special page for purging all LRMI cache entries."""

    name = "PurgeLrmiCache"
    group = "pagetools"

    def __init__(
        self,
        gateway: MetadataCacheGateway,
        signer: EditTokenSigner,
        action_url: str = "/wiki/Special:PurgeLrmiCache",
    ) -> None:
        self._gateway = gateway
        self._signer = signer
        self._action_url = action_url

    @property
    def title(self) -> str:
        return msg("embedlrmi-purge-cache-title")

    async def execute(self, request: AdminRequest) -> PurgeResult:
        """Handle one request to the page.

        Raises:
            PermissionDeniedError: If the user lacks the purge permission.
        """
        set_action_context("purge")
        if not request.can_purge:
            raise PermissionDeniedError(
                f"The '{PURGE_PERMISSION}' right is required to purge the LRMI cache"
            )

        form = render_purge_form(self._action_url, self._signer.issue(request.session_id))

        if request.method != "POST" or request.action != "purge":
            return PurgeResult(html=form)

        if not self._signer.validate(request.session_id, request.token):
            logger.warning("Rejected LRMI cache purge: bad edit token")
            return PurgeResult(html=error_box(msg("sessionfailure")) + form)

        try:
            deleted = await self._gateway.purge_all()
        except CacheUnavailableError as e:
            logger.error("LRMI cache purge failed: %s", e)
            return PurgeResult(html=error_box(msg("embedlrmi-purge-cache-failed")) + form)

        return PurgeResult(
            html=success_box(msg("embedlrmi-purge-cache-success", deleted)) + form,
            purged=True,
            deleted=deleted,
        )
