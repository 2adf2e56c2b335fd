import shlex
import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


@pytest.fixture
def write_file():
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def python_tool(tmp_path: Path, write_file):
    """Return a factory turning a Python snippet into a shell-style command line."""

    def _tool(name: str, body: str) -> str:
        script = write_file(tmp_path / "tools" / f"{name}.py", body)
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"

    return _tool
