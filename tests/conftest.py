import os
import sys
import tempfile

import pytest

# Ensure 'src/' is on sys.path for imports like 'from infra.db.session import acquire'
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_SRC_PATH = os.path.join(_REPO_ROOT, "src")
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from app.settings import StoreSettings  # noqa: E402

_ENV_KEYS = (
    "APP_DB_PATH",
    "APP_FINALIZE_POLICY",
    "APP_CREATE_DIRS",
    "APP_TIMEOUT",
    "APP_JOURNAL_MODE",
    "APP_FOREIGN_KEYS",
    "APP_BEGIN_MODE",
    "APP_LOG_LEVEL",
    "APP_LOG_FILE",
)


@pytest.fixture(autouse=True)
def _clean_app_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def temp_db_path():
    fd, path = tempfile.mkstemp(prefix="store_", suffix=".db")
    os.close(fd)
    # Start from a missing file so the store is created by the scope
    os.remove(path)
    try:
        yield path
    finally:
        for suffix in ("", "-wal", "-shm", "-journal"):
            try:
                os.remove(path + suffix)
            except FileNotFoundError:
                pass


@pytest.fixture()
def settings(tmp_path):
    return StoreSettings(db_path=tmp_path / "default.db", _env_file=None)


@pytest.fixture()
def legacy_settings(tmp_path):
    """Settings reproducing commit-on-every-exit finalization."""
    return StoreSettings(
        db_path=tmp_path / "default.db", finalize_policy="always_commit", _env_file=None
    )
