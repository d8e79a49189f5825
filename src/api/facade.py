# src/api/facade.py — v2
"""Public API facade: host hook entry points over the metadata gateway.

Usage:
    from embedlrmi.api.facade import EmbedLrmi
    lrmi = EmbedLrmi.from_settings(load_settings())
    await lrmi.on_before_page_display(page, head)

Each method mirrors one host extension point (page display, action
dispatch, toolbox/sidebar links, save complete, purge special page).
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from embedlrmi.admin.purge import PurgeCachePage
from embedlrmi.admin.tokens import EditTokenSigner
from embedlrmi.api.host import HeadInjector, OutputBuffer, PageContext
from embedlrmi.config.settings import Settings
from embedlrmi.core.identity import IdentityResolver
from embedlrmi.core.payload import MetadataPayload, first_node
from embedlrmi.gateway.metadata_gateway import MetadataCacheGateway
from embedlrmi.logging.context import set_action_context
from embedlrmi.render.jsonld import HEAD_ITEM_NAME, jsonld_script
from embedlrmi.render.messages import msg
from embedlrmi.render.views import render_lrmi_view

logger = logging.getLogger(__name__)

LRMI_ACTION = "lrmi"
TOOLBOX_LINK_ID = "t-lrmi"
LRMI_VIEW_ROBOT_POLICY = "noindex,nofollow"


class EmbedLrmi:
    """Wires resolver, gateway and renderers behind host-shaped hooks."""

    def __init__(
        self,
        gateway: MetadataCacheGateway,
        resolver: IdentityResolver | None = None,
        signer: EditTokenSigner | None = None,
    ) -> None:
        self._gateway = gateway
        self._resolver = resolver or IdentityResolver()
        self._signer = signer or EditTokenSigner()

    @classmethod
    def from_settings(cls, settings: Settings) -> EmbedLrmi:
        """Build the full stack (store, provider, gateway) from settings."""
        from embedlrmi.cache.cache_factory import create_cache_store
        from embedlrmi.provider.http_provider import HttpMetadataProvider

        store = create_cache_store(settings)
        provider = HttpMetadataProvider(
            endpoint=settings.endpoint, timeout_s=settings.http_timeout_s,
        )
        gateway = MetadataCacheGateway(
            store=store,
            provider=provider,
            ttl_s=settings.cache_expiry,
            namespace=settings.cache_namespace,
            single_flight=settings.single_flight,
        )
        return cls(
            gateway=gateway,
            resolver=IdentityResolver(settings.url_replacements),
            signer=EditTokenSigner(settings.admin_secret or None),
        )

    @property
    def gateway(self) -> MetadataCacheGateway:
        return self._gateway

    def canonical_url(self, page_url: str) -> str:
        return self._resolver.resolve(page_url)

    async def metadata_for(self, page: PageContext) -> MetadataPayload | None:
        return await self._gateway.fetch_metadata(self.canonical_url(page.full_url))

    async def on_before_page_display(self, page: PageContext, head: HeadInjector) -> bool:
        """Inject nodes[0] as JSON-LD into the page head on content pages."""
        set_action_context("view")
        if not page.is_content_page:
            return True

        node = first_node(await self.metadata_for(page))
        if node is not None:
            head.add_head_item(HEAD_ITEM_NAME, jsonld_script(node))
        return True

    async def on_perform_action(
        self, action: str | None, page: PageContext, output: OutputBuffer
    ) -> bool:
        """Serve ?action=lrmi. Returns False when the action was handled."""
        if action != LRMI_ACTION:
            return True

        set_action_context(LRMI_ACTION)
        payload = await self.metadata_for(page)
        output.set_robot_policy(LRMI_VIEW_ROBOT_POLICY)
        output.set_page_title(msg("embedlrmi-show-lrmi-data"))
        output.add_html(render_lrmi_view(payload))
        return False

    def toolbox_link(self, page: PageContext) -> dict[str, Any] | None:
        """Toolbox navigation entry for content pages."""
        if not page.is_content_page:
            return None
        base = page.local_url or page.full_url
        sep = "&" if "?" in base else "?"
        return {
            "text": msg("embedlrmi-show-lrmi-link"),
            "href": f"{base}{sep}{urlencode({'action': LRMI_ACTION})}",
            "id": TOOLBOX_LINK_ID,
        }

    def add_sidebar_link(self, page: PageContext, sidebar: dict[str, Any]) -> None:
        link = self.toolbox_link(page)
        if link is not None:
            sidebar.setdefault("TOOLBOX", {})["lrmi"] = link

    async def on_page_save_complete(self, page: PageContext) -> None:
        """Drop cached metadata for a page whose content changed."""
        set_action_context("save")
        await self._gateway.invalidate(self.canonical_url(page.full_url))

    def purge_page(self, action_url: str = "/wiki/Special:PurgeLrmiCache") -> PurgeCachePage:
        return PurgeCachePage(self._gateway, self._signer, action_url=action_url)
