import signal
import sys

import pytest
from loguru import logger

from cleaner import main as cli
from cleaner.path_cleaner import PathCleaner


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.__stderr__)


def test_cleans_paths(make_tree, make_file, tmp_path):
    tree = make_tree()
    file = make_file()

    code = cli.main([str(tree), str(file), str(tmp_path / "missing"), "--sleep-period-millis", "0"])

    assert code == 0
    assert not tree.exists()
    assert not file.exists()


def test_failure_exit_code(make_file, monkeypatch, log_messages):
    path = make_file()

    def locked(target):
        raise PermissionError(13, "locked", str(target))

    monkeypatch.setattr(cli, "setup_logger", lambda *args: None)
    monkeypatch.setattr(
        cli, "PathCleaner", lambda observers: PathCleaner(deleter=locked, observers=observers)
    )

    code = cli.main([str(path), "--max-tries", "2", "--sleep-period-millis", "0"])

    assert code == 1
    assert path.exists()
    assert any(m.startswith(f"❌ {path} failed with PermissionError") for m in log_messages)
    assert "🧹 0 deleted, 0 missing, 1 failed (2 attempts)" in log_messages


def test_invalid_policy_exit_code(make_file):
    assert cli.main([str(make_file()), "--max-tries", "0"]) == 2


def test_invalid_environment_exit_code(make_file, monkeypatch):
    monkeypatch.setenv("FILE_CLEANER_SLEEP_PERIOD_MILLIS", "-1")

    assert cli.main([str(make_file())]) == 2


def test_policy_defaults_come_from_settings(make_file, monkeypatch):
    monkeypatch.setenv("FILE_CLEANER_MAX_TRIES", "1")
    seen = {}
    real_clean = PathCleaner.clean

    def spy(self, request, token=None):
        seen["request"] = request
        return real_clean(self, request, token)

    monkeypatch.setattr(PathCleaner, "clean", spy)

    assert cli.main([str(make_file()), "--sleep-period-millis", "5"]) == 0
    assert seen["request"].max_tries == 1
    assert seen["request"].sleep_period_millis == 5


def test_signal_handlers_restored(make_file):
    original = signal.getsignal(signal.SIGTERM)

    cli.main([str(make_file())])

    assert signal.getsignal(signal.SIGTERM) == original


def test_requires_paths():
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 2
