"""Websocket transport adapter for the simulation services.

One server answers three routes:

- ``/ws``: websocket; each JSON parameter message starts an independent heat
  run whose frames are streamed back one message per frame.
- ``/api/simulate``: plain GET with v0, angle, h0, dt query parameters,
  answered with the projectile result as JSON.
- ``/health``: liveness probe.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, AsyncIterator, Awaitable, Callable, Generator, Protocol
from urllib.parse import parse_qsl, urlsplit

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from .errors import InstabilityError, ValidationError
from .protocol import HEALTH_PAYLOAD, dumps, encode_error, loads_mapping
from .services import SimulationService, build_default_simulation_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
    """Connection acceptance and routing settings.

    ``origins=None`` accepts websocket handshakes from any origin.
    """

    host: str = "localhost"
    port: int = 8080
    origins: tuple[str, ...] | None = None
    ws_path: str = "/ws"
    simulate_path: str = "/api/simulate"
    health_path: str = "/health"


class MessageChannel(Protocol):
    def __aiter__(self) -> AsyncIterator[str | bytes]: ...

    async def send(self, message: str) -> None: ...


def handle_http_path(
    path: str,
    service: SimulationService,
    config: ServerConfig,
) -> tuple[HTTPStatus, dict[str, Any]] | None:
    """Answer plain HTTP routes; None lets the websocket handshake proceed."""
    parts = urlsplit(path)
    route = parts.path
    if route == config.ws_path:
        return None
    if route == config.health_path:
        return HTTPStatus.OK, dict(HEALTH_PAYLOAD)
    if route == config.simulate_path:
        query = dict(parse_qsl(parts.query))
        try:
            return HTTPStatus.OK, service.run_projectile_payload(query)
        except ValidationError as exc:
            logger.info("Rejected projectile request %r: %s", query, exc)
            return HTTPStatus.BAD_REQUEST, encode_error(exc)
    return HTTPStatus.NOT_FOUND, encode_error(f"not found: {route}")


def make_process_request(
    service: SimulationService,
    config: ServerConfig,
) -> Callable[[ServerConnection, Request], Awaitable[Response | None]]:
    async def process_request(connection: ServerConnection, request: Request) -> Response | None:
        # Projectile runs stay off the event loop.
        handled = await asyncio.to_thread(handle_http_path, request.path, service, config)
        if handled is None:
            return None
        status, payload = handled
        response = connection.respond(status, dumps(payload) + "\n")
        del response.headers["Content-Type"]
        response.headers["Content-Type"] = "application/json"
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    return process_request


async def _pump_frames(channel: MessageChannel, frames: Generator[dict[str, Any], None, None]) -> int:
    # Each frame is computed off the event loop; nothing more is computed
    # once the channel stops accepting messages.
    sent = 0
    while True:
        message = await asyncio.to_thread(next, frames, None)
        if message is None:
            return sent
        try:
            await channel.send(dumps(message))
        except BaseException:
            frames.close()
            raise
        sent += 1


async def serve_heat_session(channel: MessageChannel, service: SimulationService) -> int:
    """Serve parameter messages until the channel closes; return completed runs."""
    runs = 0
    async for raw in channel:
        try:
            frames = service.stream_heat_payload(loads_mapping(raw))
        except (ValidationError, InstabilityError) as exc:
            logger.info("Rejected heat request: %s", exc)
            await channel.send(dumps(encode_error(exc)))
            continue
        sent = await _pump_frames(channel, frames)
        runs += 1
        logger.debug("Heat run %d streamed %d frame(s)", runs, sent)
    return runs


def make_handler(service: SimulationService) -> Callable[[ServerConnection], Any]:
    async def handler(connection: ServerConnection) -> None:
        peer = connection.remote_address
        logger.info("Client connected: %s", peer)
        try:
            runs = await serve_heat_session(connection, service)
        except ConnectionClosed as exc:
            logger.info("Client %s disconnected mid-run: %s", peer, exc)
            return
        logger.info("Client %s closed after %d run(s)", peer, runs)

    return handler


async def run_server(config: ServerConfig, service: SimulationService | None = None) -> None:
    """Serve until cancelled."""
    svc = build_default_simulation_service() if service is None else service
    origins = list(config.origins) if config.origins else None
    async with serve(
        make_handler(svc),
        config.host,
        config.port,
        origins=origins,
        process_request=make_process_request(svc, config),
    ) as server:
        logger.info("Server listening on ws://%s:%d%s", config.host, config.port, config.ws_path)
        await server.serve_forever()


def serve_forever(config: ServerConfig) -> None:
    """Blocking entry point used by the CLI."""
    asyncio.run(run_server(config))
