from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Role(str, Enum):
    PLAYER = "player"
    NODE = "node"
    SPECTATOR = "spectator"


@dataclass
class HostConfig:
    host: str = "0.0.0.0"
    port: int = 8765
    hello_timeout_s: float = 5.0
    announce_blocks: bool = True
    # Shared secret a node must present in its hello; None refuses all nodes.
    node_token: Optional[str] = None


@dataclass
class ClientSession:
    client_id: int
    role: Role
    websocket: Any
