"""Shared fixtures: a local aiohttp server for transport tests."""

import asyncio
from collections.abc import AsyncIterator

import pytest_asyncio
from aiohttp import web
from multidict import CIMultiDict

__all__ = []

BIG_BODY_SIZE = 3_000_000


async def _echo(request: web.Request) -> web.Response:
    """Reflect the received request as JSON."""
    body = await request.read()
    return web.json_response(
        {
            "method": request.method,
            "path_qs": request.path_qs,
            "headers": [[k, v] for k, v in request.headers.items()],
            "query": [[k, v] for k, v in request.query.items()],
            "body": body.decode("utf-8"),
        }
    )


async def _big(request: web.Request) -> web.Response:
    return web.Response(body=b"a" * BIG_BODY_SIZE)


async def _multi(request: web.Request) -> web.Response:
    headers = CIMultiDict([("X-Multi", "a"), ("X-Multi", "b"), ("X-Single", "c")])
    return web.Response(text="ok", headers=headers)


async def _binary(request: web.Request) -> web.Response:
    return web.Response(body=b"\xff\xfeok")


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.Response(text="late")


RAW_BINARY_HEADER_RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"X-Bin: caf\xe9\r\n"
    b"Content-Length: 2\r\n"
    b"Connection: close\r\n"
    b"\r\n"
    b"ok"
)


@pytest_asyncio.fixture
async def raw_header_server() -> AsyncIterator[str]:
    """Start a socket server answering with a header that is not valid UTF-8."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await reader.readuntil(b"\r\n\r\n")
        writer.write(RAW_BINARY_HEADER_RESPONSE)
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    host, port = server.sockets[0].getsockname()[:2]

    yield f"http://{host}:{port}"

    server.close()
    await server.wait_closed()


@pytest_asyncio.fixture
async def http_server() -> AsyncIterator[str]:
    """Start a local HTTP server and yield its base URL.

    Routes:
        /echo: Reflects method, headers, query and body as JSON.
        /big: Returns a 3,000,000 byte body.
        /multi: Returns a repeated response header.
        /binary: Returns a body that is not valid UTF-8.
        /slow: Responds after one second.
    """
    app = web.Application()
    app.router.add_route("*", "/echo", _echo)
    app.router.add_get("/big", _big)
    app.router.add_get("/multi", _multi)
    app.router.add_get("/binary", _binary)
    app.router.add_get("/slow", _slow)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]

    yield f"http://{host}:{port}"

    await runner.cleanup()
