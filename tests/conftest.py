"""
Shared fixtures: a packages-file writer and an in-process documentation server.
"""

import asyncio
import io
import textwrap
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from rich.console import Console


@pytest.fixture
def write_packages(tmp_path):
    """Writes a packages file into tmp_path and returns its path."""

    def _write(content: str, name: str = "packages.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def console():
    """A Rich console that records plain text instead of writing to a terminal."""
    return Console(file=io.StringIO(), width=200, color_system=None)


class DocsServer:
    """
    Serves fixed documents by path and records every request's path and query.

    `routes` maps a path to (status, body). A body starting with 'redirect:'
    answers with a 302 to the rest of the string.
    """

    def __init__(self, routes: dict[str, tuple[int, bytes]]):
        self.routes = routes
        self.requests: list[str] = []
        self.base_url = ""

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path_qs)
        status, body = self.routes.get(request.path, (404, b"not found"))
        if body.startswith(b"redirect:"):
            raise web.HTTPFound(body[len(b"redirect:") :].decode())
        return web.Response(status=status, body=body)

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        return app

    def run(self, fn):
        """
        Starts the server, awaits fn(base_url), and shuts the server down.

        A fresh application is built on every call since each asyncio.run uses
        its own event loop.
        """

        async def _main():
            server = TestServer(self._build_app())
            await server.start_server()
            self.base_url = str(server.make_url("/")).rstrip("/")
            try:
                return await fn(self.base_url)
            finally:
                await server.close()

        return asyncio.run(_main())


@pytest.fixture
def docs_server():
    def _make(routes: dict[str, tuple[int, bytes]]) -> DocsServer:
        return DocsServer(routes)

    return _make
