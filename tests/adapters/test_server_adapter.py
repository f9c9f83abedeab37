"""Adapter tests for the websocket/HTTP transport, without opening sockets."""

from __future__ import annotations

import asyncio
import json
import time
from http import HTTPStatus
from typing import Any, AsyncIterator, Iterator

import pytest
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from physlab.server import ServerConfig, handle_http_path, make_process_request, serve_heat_session
from physlab.services import SimulationService


pytestmark = pytest.mark.adapter

HEAT_REQUEST = {
    "length": 1.0,
    "timeStep": 0.01,
    "spaceStep": 0.1,
    "totalTime": 0.5,
    "initialTemp": 20.0,
    "leftBoundary": 100.0,
    "rightBoundary": 0.0,
    "alpha": 9.7e-5,
}


class FakeChannel:
    """Feeds scripted client messages and records server messages."""

    def __init__(self, incoming: list[str], fail_after: int | None = None) -> None:
        self.incoming = incoming
        self.sent: list[dict[str, Any]] = []
        self.fail_after = fail_after

    async def _messages(self) -> AsyncIterator[str]:
        for message in self.incoming:
            yield message

    def __aiter__(self) -> AsyncIterator[str]:
        return self._messages()

    async def send(self, message: str) -> None:
        if self.fail_after is not None and len(self.sent) >= self.fail_after:
            raise ConnectionResetError("client went away")
        self.sent.append(json.loads(message))


class FakeConnection:
    """Builds plain HTTP responses the way a server connection does."""

    def respond(self, status: HTTPStatus, text: str) -> Response:
        headers = Headers([("Content-Type", "text/plain; charset=utf-8")])
        return Response(status.value, status.phrase, headers, text.encode())


class CountingService(SimulationService):
    """Counts how many frames the transport pulled from the engine."""

    pulled: int = 0
    closed: bool = False

    def stream_heat_payload(self, payload: dict[str, Any]) -> Iterator[dict[str, Any]]:
        frames = SimulationService.stream_heat_payload(self, payload)

        def counted() -> Iterator[dict[str, Any]]:
            try:
                for frame in frames:
                    CountingService.pulled += 1
                    yield frame
            finally:
                CountingService.closed = True

        return counted()


def test_health_route() -> None:
    status, payload = handle_http_path("/health", SimulationService(), ServerConfig())
    assert status == HTTPStatus.OK
    assert payload == {"status": "ok"}


def test_projectile_route_and_validation() -> None:
    service = SimulationService()
    config = ServerConfig()

    status, payload = handle_http_path("/api/simulate?v0=50&angle=45&h0=0&dt=0.01", service, config)
    assert status == HTTPStatus.OK
    assert payload["range"] > 0.0
    assert payload["simulationSteps"] == len(payload["trajectory"])

    status, payload = handle_http_path("/api/simulate?v0=50&angle=95&dt=0.01", service, config)
    assert status == HTTPStatus.BAD_REQUEST
    assert "angle" in payload["error"]


def test_websocket_path_passes_through_and_unknown_is_404() -> None:
    service = SimulationService()
    assert handle_http_path("/ws", service, ServerConfig()) is None
    status, payload = handle_http_path("/nope", service, ServerConfig())
    assert status == HTTPStatus.NOT_FOUND
    assert "error" in payload


def test_session_streams_runs_and_reports_errors() -> None:
    unstable = dict(HEAT_REQUEST, alpha=1.0)
    channel = FakeChannel([json.dumps(HEAT_REQUEST), json.dumps(unstable), "not json", json.dumps(HEAT_REQUEST)])

    runs = asyncio.run(serve_heat_session(channel, SimulationService()))

    assert runs == 2
    frames = [m for m in channel.sent if "temperatures" in m]
    errors = [m for m in channel.sent if "error" in m]
    # 50 steps: initial + steps 1, 11, 21, 31, 41 + step 50, per run
    assert len(frames) == 14
    assert len(errors) == 2
    assert "r = " in errors[0]["error"]
    assert channel.sent[7] == errors[0]
    assert frames[0]["time"] == 0.0
    assert frames[0]["temperatures"][0] == 100.0
    assert frames[:7] == frames[7:]


def test_session_stops_computing_when_client_goes_away() -> None:
    CountingService.pulled = 0
    CountingService.closed = False
    request = dict(HEAT_REQUEST, totalTime=1000.0)
    channel = FakeChannel([json.dumps(request)], fail_after=3)

    with pytest.raises(ConnectionResetError):
        asyncio.run(serve_heat_session(channel, CountingService()))

    assert len(channel.sent) == 3
    assert CountingService.pulled == 4
    assert CountingService.closed


def test_http_response_is_json_with_cors_header() -> None:
    process_request = make_process_request(SimulationService(), ServerConfig())

    response = asyncio.run(process_request(FakeConnection(), Request("/health", Headers())))

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/json"
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert json.loads(response.body) == {"status": "ok"}
    assert asyncio.run(process_request(FakeConnection(), Request("/ws", Headers()))) is None


def test_projectile_request_leaves_event_loop_responsive() -> None:
    process_request = make_process_request(SimulationService(), ServerConfig())
    request = Request("/api/simulate?v0=50&angle=45&h0=0&dt=0.00002", Headers())
    gaps: list[float] = []

    async def scenario() -> Response | None:
        done = asyncio.Event()

        async def ticker() -> None:
            last = time.perf_counter()
            while not done.is_set():
                await asyncio.sleep(0.01)
                now = time.perf_counter()
                gaps.append(now - last)
                last = now

        task = asyncio.create_task(ticker())
        response = await process_request(FakeConnection(), request)
        done.set()
        await task
        return response

    response = asyncio.run(scenario())

    assert response is not None
    assert response.status_code == 200
    assert json.loads(response.body)["range"] > 0.0
    assert gaps
    assert max(gaps) < 0.5
