import logging

import httpx
import pytest
from pytest_httpx import HTTPXMock

from restbind import (
    CallResult,
    Client,
    ClientBuilder,
    ClientConfig,
    RestBindError,
    Service,
    setup_logging,
    stub,
)


class PingService(Service):
    ping = stub("GET", "/ping/{0}", params=[str], returns=(bytes, RestBindError))


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()

        assert config.base_url == ""
        assert config.timeout is None
        assert config.raise_for_status is False

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESTBIND_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("RESTBIND_TIMEOUT", "2.5")

        config = ClientConfig.from_env()

        assert config.base_url == "https://env.example.com"
        assert config.timeout == 2.5

    def test_builder_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESTBIND_BASE_URL", "https://env.example.com")

        with ClientBuilder.from_env().timeout(3).build() as client:
            assert client.config.base_url == "https://env.example.com"
            assert client.config.timeout == 3


class TestClient:
    def test_generic_call(self, httpx_mock: HTTPXMock, raw_client: Client, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/ping/a", content=b"pong")
        service = PingService()
        raw_client.init(service)

        result = service.call("ping", "a")

        assert result == CallResult(b"pong", None)

    def test_unknown_stub(self, raw_client: Client):
        service = PingService()
        raw_client.init(service)

        with pytest.raises(AttributeError, match="no initialized stub 'pong'"):
            service.call("pong")

    def test_uninitialized_service(self):
        with pytest.raises(AttributeError):
            PingService().call("ping", "a")

    def test_supplied_http_client(self, httpx_mock: HTTPXMock, base_url: str):
        http_client = httpx.Client(headers={"X-Default": "1"})
        client = ClientBuilder().base_url(base_url).set_http_client(http_client).build()
        service = PingService()
        client.init(service)
        httpx_mock.add_response(content=b"pong")

        service.ping("a")
        client.close()

        assert httpx_mock.get_request() is not None
        assert not http_client.is_closed
        http_client.close()

    def test_close_owned_http_client(self):
        client = ClientBuilder().build()

        with client:
            pass

        assert client._http_client.is_closed

    def test_init_logs_at_debug(self, raw_client: Client, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger="restbind"):
            raw_client.init(PingService())

        assert "Compiled stub PingService.ping: GET /ping/{0}" in caplog.text
        assert "Initialized PingService with 1 stubs" in caplog.text


class TestSetupLogging:
    def test_adds_a_single_handler(self):
        logger = logging.getLogger("restbind")
        before = list(logger.handlers)
        level = logger.level

        try:
            setup_logging(should_debug=True)
            setup_logging(should_debug=False)

            added = [h for h in logger.handlers if h not in before]
            assert len(added) <= 1
            assert logger.level == logging.INFO
        finally:
            for handler in logger.handlers:
                if handler not in before:
                    logger.removeHandler(handler)
            logger.setLevel(level)
