# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the language-server session lifecycle."""

import sys
from pathlib import Path

import pytest

from spice_lang.session import LanguageServerSession, SessionError

_ECHO_SERVER = [
    sys.executable,
    "-c",
    "import sys\n"
    "for line in sys.stdin.buffer:\n"
    "    sys.stdout.buffer.write(line)\n"
    "    sys.stdout.buffer.flush()\n",
]


def test_session_exchanges_bytes_and_stops() -> None:
    session = LanguageServerSession(_ECHO_SERVER)
    session.start()
    try:
        writer, reader = session.transport
        writer.write(b"Content-Length: 2\r\n")
        writer.flush()
        assert reader.readline() == b"Content-Length: 2\r\n"
        assert session.is_running
    finally:
        session.stop()

    assert not session.is_running
    assert session.stop() is None


def test_session_rejects_double_start_and_unstarted_transport() -> None:
    with LanguageServerSession(_ECHO_SERVER) as session:
        with pytest.raises(SessionError, match="already started"):
            session.start()

    with pytest.raises(SessionError, match="not started"):
        _ = session.transport


def test_session_start_failure_is_session_error(tmp_path: Path) -> None:
    session = LanguageServerSession([str(tmp_path / "missing-server")])

    with pytest.raises(SessionError, match="Failed to start"):
        session.start()
    assert not session.is_running
