import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure local source package (src/restbind) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from restbind import Client, ClientBuilder, JsonUnmarshaler  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("RESTBIND_BASE_URL", raising=False)
    monkeypatch.delenv("RESTBIND_TIMEOUT", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://test.example.com"


@pytest.fixture
def client(base_url: str) -> Generator[Client, None, None]:
    with (
        ClientBuilder()
        .base_url(base_url)
        .set_unmarshaler(JsonUnmarshaler())
        .build()
    ) as client:
        yield client


@pytest.fixture
def raw_client(base_url: str) -> Generator[Client, None, None]:
    """A client without an unmarshaler."""
    with ClientBuilder().base_url(base_url).build() as client:
        yield client
