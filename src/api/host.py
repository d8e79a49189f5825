# src/api/host.py — v2
"""Host CMS collaborators consumed by the adapter.

The host supplies the current page and two sinks: a head injector for
<head> items and an HTML output buffer that also takes the page title
and robot policy.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class PageContext(BaseModel):
    """The page being rendered or saved."""

    full_url: str
    local_url: str = ""
    is_content_page: bool = True


@runtime_checkable
class HeadInjector(Protocol):
    def add_head_item(self, name: str, markup: str) -> None: ...


@runtime_checkable
class OutputBuffer(Protocol):
    def add_html(self, html: str) -> None: ...

    def set_page_title(self, title: str) -> None: ...

    def set_robot_policy(self, policy: str) -> None: ...


class BufferedOutput:
    """List-backed HeadInjector + OutputBuffer (CLI and tests)."""

    def __init__(self) -> None:
        self.head_items: dict[str, str] = {}
        self.chunks: list[str] = []
        self.page_title: str | None = None
        self.robot_policy: str | None = None

    def add_head_item(self, name: str, markup: str) -> None:
        # Same name replaces, as unique head tags do in the host
        self.head_items[name] = markup

    def add_html(self, html: str) -> None:
        self.chunks.append(html)

    def set_page_title(self, title: str) -> None:
        self.page_title = title

    def set_robot_policy(self, policy: str) -> None:
        self.robot_policy = policy

    @property
    def html(self) -> str:
        return "".join(self.chunks)
