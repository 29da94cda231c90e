# elmnet/elm/transport.py
from __future__ import annotations

import socket
import ssl
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Optional

import serial

from ..config import SessionConfig, TlsOptions
from .errors import ConnectError


def build_tls_context(options: TlsOptions) -> ssl.SSLContext:
    ctx = ssl.create_default_context(cafile=options.ca_file)
    ctx.minimum_version = options.tls_version
    if not options.verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


class TcpTransport:
    """
    Serial-like wrapper around a connected socket (plain or TLS).

    read_chunk() blocks up to the given timeout:
      - bytes  -> data
      - b""    -> peer closed the stream
      - None   -> nothing arrived in time
    """

    def __init__(self, sock: socket.socket, *, write_timeout: Optional[float] = None, chunk_size: int = 4096):
        self._sock: Optional[socket.socket] = sock
        self._write_timeout = write_timeout
        self._chunk_size = chunk_size
        self._eof = False

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def write(self, data: bytes) -> int:
        sock = self._sock
        if sock is None:
            raise OSError("Socket is closed")
        sock.settimeout(self._write_timeout)
        sock.sendall(data)
        return len(data)

    def flush(self) -> None:
        # sendall() leaves nothing buffered on our side
        return None

    def read_chunk(self, timeout: float) -> Optional[bytes]:
        sock = self._sock
        if sock is None:
            raise OSError("Socket is closed")
        if self._eof:
            return b""
        sock.settimeout(timeout if timeout > 0 else 0.0)
        try:
            data = sock.recv(self._chunk_size)
        except (socket.timeout, BlockingIOError, ssl.SSLWantReadError):
            return None
        if not data:
            if self._sock is None:
                # close() from another thread, not the peer hanging up
                raise OSError("Socket closed locally")
            self._eof = True
        return data

    def reset_input_buffer(self) -> None:
        sock = self._sock
        if sock is None or self._eof:
            return
        sock.settimeout(0.0)
        while True:
            try:
                data = sock.recv(self._chunk_size)
            except (socket.timeout, BlockingIOError, ssl.SSLWantReadError):
                return
            if not data:
                self._eof = True
                return

    def close(self) -> None:
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        finally:
            sock.close()


class SerialTransport:
    """Same interface over a pyserial port (device path or pyserial URL)."""

    def __init__(self, port: serial.SerialBase):
        self._port: Optional[serial.SerialBase] = port

    @property
    def is_open(self) -> bool:
        if self._port is None:
            return False
        return bool(self._port.is_open)

    def write(self, data: bytes) -> int:
        if self._port is None:
            raise OSError("Serial port is closed")
        return self._port.write(data) or 0

    def flush(self) -> None:
        if self._port is not None:
            self._port.flush()

    def read_chunk(self, timeout: float) -> Optional[bytes]:
        if self._port is None:
            raise OSError("Serial port is closed")
        self._port.timeout = max(timeout, 0.0)
        first = self._port.read(1)
        if not first:
            return None
        waiting = self._port.in_waiting
        if waiting:
            return first + self._port.read(waiting)
        return first

    def reset_input_buffer(self) -> None:
        if self._port is not None:
            self._port.reset_input_buffer()

    def close(self) -> None:
        port, self._port = self._port, None
        if port is not None:
            port.close()


def _resolve(host: str, port: int, deadline: float):
    """Resolve host on a worker thread, giving up at the deadline."""
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="elm-resolve")
    try:
        future = executor.submit(socket.getaddrinfo, host, port, type=socket.SOCK_STREAM)
        try:
            return future.result(timeout=max(deadline - time.monotonic(), 0.0))
        except FuturesTimeoutError:
            raise ConnectError(f"Connection to {host}:{port} timed out resolving {host}")
        except socket.gaierror as e:
            raise ConnectError(f"Cannot resolve {host}: {e}")
    finally:
        # a hung lookup keeps its worker thread; nothing waits for it
        executor.shutdown(wait=False)


def _dial(host: str, port: int, deadline: float) -> socket.socket:
    infos = _resolve(host, port, deadline)

    last_error: Optional[Exception] = None
    for family, socktype, proto, _canon, addr in infos:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        sock = socket.socket(family, socktype, proto)
        try:
            sock.settimeout(remaining)
            sock.connect(addr)
            return sock
        except OSError as e:
            last_error = e
            sock.close()

    if last_error is None or isinstance(last_error, socket.timeout):
        raise ConnectError(f"Connection to {host}:{port} timed out")
    raise ConnectError(f"Connection to {host}:{port} failed: {last_error}")


def open_tcp(config: SessionConfig) -> TcpTransport:
    deadline = time.monotonic() + config.timeout
    sock = _dial(config.host, config.port, deadline)

    if config.use_tls:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            sock.close()
            raise ConnectError(f"Connection to {config.address} timed out before TLS handshake")
        try:
            ctx = build_tls_context(config.tls)
            sock.settimeout(remaining)
            sock = ctx.wrap_socket(sock, server_hostname=config.host)
        except (OSError, ssl.SSLError) as e:
            sock.close()
            raise ConnectError(f"TLS handshake with {config.address} failed: {e}")

    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    return TcpTransport(sock, write_timeout=config.timeout)


def open_serial(config: SessionConfig) -> SerialTransport:
    try:
        port = serial.serial_for_url(
            config.serial_port,
            baudrate=config.baudrate,
            timeout=config.timeout,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
        )
    except (serial.SerialException, ValueError) as e:
        raise ConnectError(f"Serial port error: {e}")
    return SerialTransport(port)


def open_transport(config: SessionConfig):
    """Dial the device described by config. No retries."""
    if config.serial_port:
        return open_serial(config)
    return open_tcp(config)
