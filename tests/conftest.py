import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from mpx2vue.template import ParseResult, parse_template

REPO_ROOT = Path(__file__).resolve().parent.parent


def run_cli(cwd: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env.pop("MPX2VUE_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "mpx2vue.cli", *args],
        cwd=cwd, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    return json.loads(s)


@pytest.fixture
def parse():
    """Разбор без ошибок: падает, если парсер что-то сообщил."""
    def _parse(text: str) -> ParseResult:
        result = parse_template(text)
        assert result.errors == [], result.errors
        return result
    return _parse
