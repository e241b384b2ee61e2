"""Poker host package: wraps the block-seeded poker worker with networking."""

from .models import HostConfig
from .server import HostServer

__all__ = ["HostConfig", "HostServer"]
