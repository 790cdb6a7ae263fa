import io
import re
import sys

import pytest

from salvo import main as entry

pytestmark = pytest.mark.usefixtures("restore_root_logging")


@pytest.fixture
def quiet_env(monkeypatch):
    monkeypatch.setattr(entry, "load_default_env_files", lambda: None)
    monkeypatch.setenv("SALVO_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SALVO_SEED", "5")
    monkeypatch.delenv("SALVO_LOG_FILE", raising=False)
    monkeypatch.delenv("SALVO_STRICT_COORDINATES", raising=False)
    return monkeypatch


def test_main_answers_every_line_until_input_ends(quiet_env) -> None:
    stdout = io.StringIO()
    quiet_env.setattr(sys, "stdin", io.StringIO("Init 6 6 2 1\nInit 4 4 3\n"))
    quiet_env.setattr(sys, "stdout", stdout)
    assert entry.main() == 0
    lines = stdout.getvalue().splitlines()
    assert len(lines) == 2
    assert all(re.fullmatch(r"\d+ \d+", line) for line in lines)


def test_main_fails_fast_on_malformed_line(quiet_env) -> None:
    stdout = io.StringIO()
    quiet_env.setattr(sys, "stdin", io.StringIO("Init 6 6 2\nFire 1 1\nInit 6 6 2\n"))
    quiet_env.setattr(sys, "stdout", stdout)
    assert entry.main() == 1
    assert len(stdout.getvalue().splitlines()) == 1
