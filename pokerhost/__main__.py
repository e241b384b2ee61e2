import argparse
import asyncio
import logging

from blockpoker.worker import PokerWorker

from .models import HostConfig
from .server import HostServer


def main() -> None:
    parser = argparse.ArgumentParser(description="Block poker host server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--hello-timeout", type=float, default=5.0, help="Seconds to wait for a client hello")
    parser.add_argument(
        "--no-announce",
        action="store_true",
        help="Do not broadcast new_block frames to players when the deck is reseeded",
    )
    parser.add_argument(
        "--seed-block",
        default=None,
        help="Block hash to shuffle the first deck from (useful when no node is connected yet)",
    )
    parser.add_argument(
        "--node-token",
        default=None,
        help="Secret a node connection must send in its hello to feed block tips (nodes refused if unset)",
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = HostConfig(
        host=args.host,
        port=args.port,
        hello_timeout_s=args.hello_timeout,
        announce_blocks=not args.no_announce,
        node_token=args.node_token,
    )

    worker = PokerWorker()
    server = HostServer(config, worker=worker)
    if args.seed_block:
        worker.start()
        worker.on_tip_change(args.seed_block)
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
