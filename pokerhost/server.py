from __future__ import annotations

import asyncio
import hmac
import json
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

import websockets
from websockets.asyncio.server import ServerConnection

from blockpoker.models import DealResult, FoldResult, GameError, ShowdownResult
from blockpoker.worker import PokerWorker

from .models import ClientSession, HostConfig, Role
from .render import render_result

LOGGER = logging.getLogger("poker_host")

# HostServer glues the poker worker to WebSocket clients. Player connections
# send moves and the node connection feeds block tips. The worker stays free
# of any networking.

RESULT_TYPES = {
    DealResult: "deal",
    ShowdownResult: "play",
    FoldResult: "fold",
}


class HostServer:
    def __init__(self, config: HostConfig, worker: Optional[PokerWorker] = None) -> None:
        self.config = config
        self.worker = worker or PokerWorker()
        self.sessions: Dict[int, ClientSession] = {}
        self.lock = asyncio.Lock()
        self._next_client_id = 0

    async def start(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        host = host or self.config.host
        port = port or self.config.port
        if not self.worker.running:
            self.worker.start()
        try:
            async with websockets.serve(self._handle_connection, host, port):
                LOGGER.info("Poker host listening on %s:%s", host, port)
                # Serve until the worker is stopped.
                await asyncio.to_thread(self.worker.wait_shutdown)
        finally:
            self.stop()
        LOGGER.info("Poker host stopped")

    def stop(self) -> None:
        self.worker.stop()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        # First message must be "hello" so we know who we are talking to.
        hello = await self._read_message(websocket)
        if hello is None or hello.get("type") != "hello":
            await self._send_error(websocket, code="BAD_HELLO", msg="Expected hello")
            await websocket.close()
            return
        role_raw = hello.get("role") or Role.PLAYER.value
        try:
            role = Role(role_raw.strip().casefold() if isinstance(role_raw, str) else role_raw)
        except ValueError:
            await self._send_error(websocket, code="BAD_HELLO", msg=f"Unknown role {role_raw!r}")
            await websocket.close()
            return
        if role == Role.NODE and not self._node_token_ok(hello.get("token")):
            LOGGER.warning("Rejected node hello with missing or wrong token")
            await self._send_error(websocket, code="BAD_HELLO", msg="Node token rejected")
            await websocket.close()
            return

        session = await self._register(role, websocket)
        LOGGER.info("Client %s connected as %s", session.client_id, role.value)
        await self._send_json(websocket, "welcome", {
            "client_id": session.client_id,
            "role": role.value,
            "running": self.worker.running,
            "state": self.worker.snapshot().payload(),
        })

        try:
            async for raw in websocket:
                await self._handle_message(session, self._decode(raw))
        except websockets.ConnectionClosed:
            pass
        finally:
            async with self.lock:
                self.sessions.pop(session.client_id, None)
        LOGGER.info("Client %s (%s) disconnected", session.client_id, role.value)

    def _node_token_ok(self, token: object) -> bool:
        # Whoever feeds tips picks the shuffle seed, so nodes must authenticate.
        expected = self.config.node_token
        if not expected or not isinstance(token, str):
            return False
        return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))

    async def _register(self, role: Role, websocket: ServerConnection) -> ClientSession:
        async with self.lock:
            client_id = self._next_client_id
            self._next_client_id += 1
            session = ClientSession(client_id=client_id, role=role, websocket=websocket)
            self.sessions[client_id] = session
        return session

    async def _handle_message(self, session: ClientSession, message: Dict[str, object]) -> None:
        msg_type = message.get("type")
        if msg_type == "poker" and session.role == Role.PLAYER:
            await self._handle_move(session, message)
        elif msg_type == "tip" and session.role == Role.NODE:
            await self._handle_tip(session, message)
        elif msg_type == "status":
            snapshot = self.worker.snapshot()
            payload = snapshot.payload()
            payload["text"] = render_result(snapshot)
            await self._send_json(session.websocket, "status", payload)
        else:
            await self._send_error(session.websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")

    async def _handle_move(self, session: ClientSession, message: Dict[str, object]) -> None:
        move = message.get("move")
        if not isinstance(move, str):
            await self._send_error(session.websocket, code="BAD_SCHEMA", msg="move required")
            return

        result = self.worker.handle_move(move)
        if isinstance(result, GameError):
            LOGGER.warning(
                "Rejected move client=%s move=%s reason=%s",
                session.client_id,
                move,
                result.kind.value,
            )
            await self._send_error(session.websocket, code=result.kind.value, msg=result.msg)
            return

        LOGGER.debug("Applied move client=%s move=%s round=%s", session.client_id, move, result.round)
        msg_type = RESULT_TYPES[type(result)]
        payload = result.payload()
        payload["text"] = render_result(result)
        await self._send_json(session.websocket, msg_type, payload)
        await self._broadcast(
            "spectator/event",
            {"move": msg_type, "result": result.payload()},
            roles=(Role.SPECTATOR,),
        )

    async def _handle_tip(self, session: ClientSession, message: Dict[str, object]) -> None:
        tip_id = message.get("hash")
        if not isinstance(tip_id, str):
            await self._send_error(session.websocket, code="BAD_SCHEMA", msg="hash required")
            return
        is_bulk_replay = bool(message.get("ibd", False))

        snapshot = self.worker.on_tip_change(tip_id, is_bulk_replay)
        status = "reseeded" if snapshot is not None else "ignored"
        await self._send_json(session.websocket, "tip/ack", {"hash": tip_id, "status": status})

        if snapshot is not None and self.config.announce_blocks:
            await self._broadcast(
                "new_block",
                snapshot.payload(),
                roles=(Role.PLAYER, Role.SPECTATOR),
            )

    async def _broadcast(self, msg_type: str, payload: Dict[str, object], roles: Iterable[Role]) -> None:
        wanted = set(roles)
        async with self.lock:
            targets = [session.websocket for session in self.sessions.values() if session.role in wanted]
        if not targets:
            return
        message = self._envelope(msg_type, payload)
        await asyncio.gather(*(socket.send(message) for socket in targets), return_exceptions=True)

    async def _send_json(self, websocket: ServerConnection, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: ServerConnection, code: str, msg: str) -> None:
        await self._send_json(websocket, "error", {"code": code, "msg": msg})

    def _envelope(self, msg_type: str, payload: Dict[str, object]) -> str:
        body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    async def _read_message(self, websocket: ServerConnection) -> Optional[Dict[str, object]]:
        try:
            raw = await asyncio.wait_for(websocket.recv(), timeout=self.config.hello_timeout_s)
        except (asyncio.TimeoutError, websockets.ConnectionClosed):
            return None
        return self._decode(raw)

    def _decode(self, raw: object) -> Dict[str, object]:
        try:
            message = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return {}
        return message if isinstance(message, dict) else {}
