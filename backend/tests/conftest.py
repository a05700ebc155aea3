import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Keep tests deterministic and local-only.
os.environ["SAVEDATA_SKIP_DOTENV"] = "1"
os.environ["SAVEDATA_LOG_LEVEL"] = "DEBUG"
os.environ.pop("SAVEDATA_DB_HOST", None)

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

TEST_DB_PATH = BACKEND_ROOT / "test_savedata.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SAVEDATA_FILE_PATH"] = str(BACKEND_ROOT / "test_data.txt")
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    from savedata.core.config import get_settings

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'savedata.db'}")
    monkeypatch.setenv("SAVEDATA_FILE_PATH", str(tmp_path / "data.txt"))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def client(isolated_env):
    from savedata.core.config import get_settings
    from savedata.main import create_app

    with TestClient(create_app(get_settings())) as test_client:
        yield test_client
