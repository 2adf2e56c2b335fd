# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Explicitly owned language-server process session."""

import logging
import subprocess
from types import TracebackType
from typing import IO

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Represent a language-server lifecycle failure."""


class LanguageServerSession:
    """Own one language-server child process speaking over stdin/stdout.

    The embedding application creates the session, starts it once and stops
    it when done. Nothing in the analyzer reaches for a shared instance.
    """

    def __init__(self, command: list[str], stop_timeout_seconds: float = 5.0) -> None:
        """Initialize an unstarted session.

        Args:
            command: Server executable and arguments.
            stop_timeout_seconds: Grace period between terminate and kill.
        """
        self._command = list(command)
        self._stop_timeout_seconds = stop_timeout_seconds
        self._process: subprocess.Popen[bytes] | None = None

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    @property
    def transport(self) -> tuple[IO[bytes], IO[bytes]]:
        """Return the ``(writer, reader)`` byte streams of the running server.

        Raises:
            SessionError: If the session is not started.
        """
        process = self._process
        if process is None or process.stdin is None or process.stdout is None:
            raise SessionError("Language server session is not started")
        return process.stdin, process.stdout

    def start(self) -> None:
        """Start the server process.

        Raises:
            SessionError: If already started or the process cannot launch.
        """
        if self._process is not None:
            raise SessionError("Language server session is already started")
        try:
            self._process = subprocess.Popen(
                self._command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning(
                f"Language server launch failed (command={self._command} error={exc})"
            )
            raise SessionError(f"Failed to start language server: {exc}") from exc
        logger.info(
            f"Language server started (command={self._command} pid={self._process.pid})"
        )

    def stop(self) -> int | None:
        """Stop the server process; calling it on a stopped session is a no-op.

        Returns:
            Exit status of the stopped process, or ``None`` if nothing ran.
        """
        process = self._process
        if process is None:
            return None
        self._process = None
        for stream in (process.stdin, process.stdout):
            if stream is not None:
                stream.close()
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=self._stop_timeout_seconds)
            except subprocess.TimeoutExpired:
                logger.warning(
                    f"Language server did not terminate; killing (pid={process.pid})"
                )
                process.kill()
                process.wait()
        logger.info(
            f"Language server stopped (pid={process.pid} returncode={process.returncode})"
        )
        return process.returncode

    def __enter__(self) -> "LanguageServerSession":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.stop()
