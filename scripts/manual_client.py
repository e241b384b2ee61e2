#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

import websockets
from websockets.asyncio.client import ClientConnection

logging.basicConfig(level=logging.INFO)

# ManualClient plays the house from a terminal. As a player it sends
# deal/play/fold moves; as a node it feeds block hashes so the deck reshuffles.

PLAYER_PROMPT = "Move [deal/play/fold/status] (q=quit): "
NODE_PROMPT = "Block hash (prefix with ! for IBD, empty=status, q=quit): "


class ManualClient:
    def __init__(self, url: str, role: str, token: Optional[str] = None) -> None:
        self.url = url
        self.role = role
        self.token = token
        self.websocket: Optional[ClientConnection] = None

    async def run(self) -> None:
        async with websockets.connect(self.url) as ws:
            self.websocket = ws
            hello: Dict[str, Any] = {"type": "hello", "v": 1, "role": self.role}
            if self.token:
                hello["token"] = self.token
            await self._send(hello)
            self._print_message(json.loads(await ws.recv()))
            await asyncio.gather(self._reader(), self._writer())

    async def _reader(self) -> None:
        assert self.websocket is not None
        try:
            async for raw in self.websocket:
                self._print_message(json.loads(raw))
        except websockets.ConnectionClosed:
            print("Connection closed by host")

    async def _writer(self) -> None:
        assert self.websocket is not None
        prompt = NODE_PROMPT if self.role == "node" else PLAYER_PROMPT
        while True:
            line = (await asyncio.to_thread(input, prompt)).strip()
            if line.lower() == "q":
                await self.websocket.close()
                return
            payload = self._build_request(line)
            if payload is not None:
                await self._send(payload)

    def _build_request(self, line: str) -> Optional[Dict[str, Any]]:
        if not line or line.lower() == "status":
            return {"type": "status", "v": 1}
        if self.role == "node":
            ibd = line.startswith("!")
            return {"type": "tip", "v": 1, "hash": line.lstrip("!"), "ibd": ibd}
        return {"type": "poker", "v": 1, "move": line}

    def _print_message(self, msg: Dict[str, Any]) -> None:
        msg_type = msg.get("type", "?")
        print(f"\n>>> {msg_type.upper()}")
        if "text" in msg:
            print(msg["text"])
        elif msg_type == "welcome":
            state = msg.get("state", {})
            print(f"Client {msg.get('client_id')} as {msg.get('role')} | block={state.get('block')} round={state.get('round')}")
        elif msg_type == "new_block":
            print(f"New block {msg.get('block')}: deck reshuffled, round {msg.get('round')}")
        elif msg_type == "tip/ack":
            print(f"Tip {msg.get('hash')}: {msg.get('status')}")
        elif msg_type == "error":
            print(f"Error {msg.get('code')}: {msg.get('msg')}")
        else:
            print(json.dumps(msg, indent=2))

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Block poker manual client")
    parser.add_argument("--url", default="ws://127.0.0.1:8765")
    parser.add_argument("--role", choices=["player", "node", "spectator"], default="player")
    parser.add_argument("--token", default=None, help="Node token expected by the host (node role only)")
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(url=args.url, role=args.role, token=args.token)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
