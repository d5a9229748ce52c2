import asyncio
import functools
import logging
import socket
from collections.abc import Callable, Sequence

from smarthome.domain.command_session import CommandSession

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
DEFAULT_STREAM_LIMIT = 64 * 1024
BUSY_MESSAGE = "Server busy. Try again later."


class TcpCommandServer:
    def __init__(
        self,
        session_factory: Callable[[], CommandSession],
        host: str = "0.0.0.0",
        port: int = 9000,
        max_sessions: int = 64,
        stream_limit: int = DEFAULT_STREAM_LIMIT,
    ) -> None:
        self._session_factory = session_factory
        self._host = host
        self._port = port
        self._max_sessions = max_sessions
        self._stream_limit = stream_limit
        self._listener: socket.socket | None = None
        self._accept_task: asyncio.Task | None = None
        self._connections: set[asyncio.Task] = set()
        self._active_sessions = 0
        self._failed = asyncio.Event()

    @property
    def port(self) -> int:
        if self._listener:
            return self._listener.getsockname()[1]
        return self._port

    @property
    def active_sessions(self) -> int:
        return self._active_sessions

    @property
    def open_connections(self) -> int:
        return len(self._connections)

    @property
    def is_serving(self) -> bool:
        return self._accept_task is not None and not self._accept_task.done()

    @property
    def has_failed(self) -> bool:
        return self._failed.is_set()

    async def start(self) -> None:
        self._listener = socket.create_server((self._host, self._port))
        self._listener.setblocking(False)
        self._failed.clear()
        self._accept_task = asyncio.create_task(self._accept_loop())
        logger.info("TCP server started on %s:%d. Waiting for connections...", self._host, self.port)

    async def wait_failed(self) -> None:
        await self._failed.wait()

    async def stop(self) -> None:
        if self._accept_task:
            self._accept_task.cancel()
            await asyncio.gather(self._accept_task, return_exceptions=True)
            self._accept_task = None
        self._close_listener()

        for task in list(self._connections):
            task.cancel()
        if self._connections:
            await asyncio.gather(*self._connections, return_exceptions=True)
        logger.info("TCP server stopped")

    async def _accept_loop(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            while True:
                conn, _ = await loop.sock_accept(self._listener)
                task = asyncio.create_task(self._handle_connection(conn))
                self._connections.add(task)
                task.add_done_callback(functools.partial(self._forget_connection, conn))
        except OSError:
            logger.exception("Accepting connections failed, TCP server stopping")
            self._close_listener()
            self._failed.set()

    async def _handle_connection(self, conn: socket.socket) -> None:
        reader, writer = await asyncio.open_connection(sock=conn, limit=self._stream_limit)

        if self._active_sessions >= self._max_sessions:
            logger.warning("Session limit %d reached, rejecting client", self._max_sessions)
            await _reject(writer)
            return

        self._active_sessions += 1
        try:
            await self._run_session(reader, writer)
        finally:
            self._active_sessions -= 1

    def _forget_connection(self, conn: socket.socket, task: asyncio.Task) -> None:
        # Also covers tasks cancelled before their first step
        self._connections.discard(task)
        conn.close()

    def _close_listener(self) -> None:
        if self._listener:
            self._listener.close()
            self._listener = None

    async def _run_session(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        peer = writer.get_extra_info("peername")
        logger.info("Client connected: %s", peer)
        session = self._session_factory()

        try:
            for line in session.welcome_lines():
                writer.write(_encode_line(line))
            await writer.drain()

            while True:
                writer.write(session.prompt.encode(ENCODING))
                await writer.drain()

                raw = await reader.readline()
                if not raw:
                    break

                result = session.handle_line(raw.decode(ENCODING, errors="replace"))
                if result.response is not None:
                    writer.write(_encode_line(result.response))
                    await writer.drain()
                if result.terminate:
                    break
        except asyncio.CancelledError:
            logger.info("Session for %s cancelled", peer)
            raise
        except (ConnectionError, asyncio.IncompleteReadError) as exc:
            logger.info("Client %s dropped: %s", peer, exc)
        except (asyncio.LimitOverrunError, ValueError):
            logger.info("Client %s sent an oversized line", peer)
        except Exception:
            logger.exception("Error handling TCP client %s", peer)
        finally:
            session.terminate()
            await _close(writer)
            logger.info("Client disconnected: %s", peer)


class TcpCommandClient:
    def __init__(self, host: str = "127.0.0.1", port: int = 9000, timeout: float = 10.0) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout

    async def send_commands(self, lines: Sequence[str]) -> list[str]:
        reader, writer = await asyncio.open_connection(self._host, self._port)
        try:
            for line in lines:
                writer.write(_encode_line(line))
            await writer.drain()
            if writer.can_write_eof():
                writer.write_eof()

            raw = await asyncio.wait_for(reader.read(), timeout=self._timeout)
            return raw.decode(ENCODING, errors="replace").splitlines()
        finally:
            await _close(writer)


def _encode_line(text: str) -> bytes:
    return (text + "\n").encode(ENCODING)


async def _reject(writer: asyncio.StreamWriter) -> None:
    try:
        writer.write(_encode_line(BUSY_MESSAGE))
        await writer.drain()
    except ConnectionError:
        pass
    await _close(writer)


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    try:
        await writer.wait_closed()
    except (ConnectionError, OSError):
        pass
