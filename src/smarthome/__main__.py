import argparse
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from smarthome.config import SmartHomeConfig
from smarthome.log_format import configure_logging

ENV_FILE_PATH = Path.home() / ".config" / "smarthome" / "env"


def _load_env_file(path: Path = ENV_FILE_PATH) -> None:
    if not path.exists():
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip("'\"")
            if key not in os.environ:
                os.environ[key] = value


def main() -> None:
    _load_env_file()
    parser = argparse.ArgumentParser(description="SmartHome remote control server")
    parser.add_argument("--host", help="Interface to bind or connect to")
    parser.add_argument("--port", type=int, help="TCP port")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the TCP command server")

    send_parser = subparsers.add_parser("send", help="Send command lines to a running server")
    send_parser.add_argument("lines", nargs="+", help="Command lines, e.g. 'LOGIN a@b.c pw' LIST")

    args = parser.parse_args()

    config = SmartHomeConfig()
    if args.host:
        config.tcp_host = args.host
    if args.port:
        config.tcp_port = args.port

    log_level = logging.DEBUG if args.verbose else getattr(logging, config.log_level)
    configure_logging(log_level, config.log_file if args.command != "send" else "")

    if args.command == "send":
        asyncio.run(_run_client_command(args, config))
    else:
        asyncio.run(_run_daemon(config))


async def _run_client_command(args: argparse.Namespace, config: SmartHomeConfig) -> None:
    from smarthome.adapters.tcp_command import TcpCommandClient

    host = "127.0.0.1" if config.tcp_host == "0.0.0.0" else config.tcp_host
    client = TcpCommandClient(host=host, port=config.tcp_port)

    try:
        for line in await client.send_commands(args.lines):
            print(line)
    except ConnectionRefusedError:
        print("SmartHome server is not running", file=sys.stderr)
        sys.exit(1)


async def _run_daemon(config: SmartHomeConfig) -> None:
    from smarthome.health import run_startup_checks, has_critical_failures
    from smarthome.factory import create_server

    results = run_startup_checks(config)
    if has_critical_failures(results):
        logging.error("Critical health check failures, aborting startup")
        sys.exit(1)

    server, _ = create_server(config)

    shutdown_event = asyncio.Event()
    shutdown_triggered = False

    def handle_signal() -> None:
        nonlocal shutdown_triggered
        if shutdown_triggered:
            logging.warning("Forced exit")
            sys.exit(1)
        shutdown_triggered = True
        logging.info("Shutting down...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal)

    await server.start()

    shutdown_task = asyncio.create_task(shutdown_event.wait())
    failure_task = asyncio.create_task(server.wait_failed())

    try:
        await asyncio.wait({shutdown_task, failure_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (shutdown_task, failure_task):
            task.cancel()
        await server.stop()

    if server.has_failed:
        logging.error("TCP server stopped accepting connections, exiting")
        sys.exit(1)


if __name__ == "__main__":
    main()
