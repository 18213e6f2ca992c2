import os
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from libs.common import AppSettings
from libs.common.storage import XmlFileStore


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Save folder that does not exist until the first save."""
    return tmp_path / "SavedFiles"


@pytest.fixture
def store(store_dir: Path) -> XmlFileStore:
    return XmlFileStore(store_dir)


@pytest.fixture
def settings(store_dir: Path) -> AppSettings:
    return AppSettings(
        APP_ENV="dev",
        LOG_LEVEL="WARNING",
        STORAGE_BASE_DIR=str(store_dir),
        CORS_ALLOWED_ORIGIN="http://editor.test",
    )


@pytest.fixture
def app(settings: AppSettings):
    from apps.xml_api.dependencies import get_file_store, get_settings_dep
    from apps.xml_api.main import create_app

    application = create_app(settings)
    application.dependency_overrides[get_settings_dep] = lambda: settings
    application.dependency_overrides[get_file_store] = lambda: XmlFileStore(settings.storage_path)
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
