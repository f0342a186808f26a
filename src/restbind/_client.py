from logging import getLogger
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

import httpx

from ._compiler import compile_service
from ._config import ClientConfig
from ._services import Dispatcher, RequestTransformer, StreamingDispatcher
from ._utils import get_httpx_client_kwargs
from ._utils.constants import LOGGER_NAME
from .models.descriptors import CallResult, MethodDescriptor
from .retry import RetryHandler
from .unmarshal import Unmarshaler

Invoker = Callable[..., CallResult]


class Service:
    """Base class for service declarations.

    Subclasses declare their stubs as class attributes built with ``stub``.
    Once a client has initialized an instance, every stub is callable as a
    method of that instance and through ``call``.

    Examples:
        ```python
        class RepoService(Service):
            get_repo = stub(
                "GET", "/repos/{owner}/{repo}", params=[RepoArgs], returns=(Repo, RestBindError)
            )

        service = RepoService()
        client.init(service)
        repo, failure = service.get_repo(RepoArgs(owner="octo", repo="hello"))
        ```
    """

    _descriptors: Mapping[str, MethodDescriptor] = MappingProxyType({})
    _invokers: Mapping[str, Invoker] = MappingProxyType({})

    @property
    def descriptors(self) -> Mapping[str, MethodDescriptor]:
        return self._descriptors

    def call(self, name: str, *args: Any) -> CallResult:
        try:
            invoker = self._invokers[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no initialized stub '{name}'"
            ) from None
        return invoker(*args)

    def _bind(
        self,
        descriptors: Mapping[str, MethodDescriptor],
        invokers: Mapping[str, Invoker],
    ) -> None:
        self._descriptors = MappingProxyType(dict(descriptors))
        self._invokers = MappingProxyType(dict(invokers))
        for name, invoker in invokers.items():
            setattr(self, name, invoker)


class Client:
    """Compiles service declarations and dispatches their calls.

    Configuration is fixed at construction; use ``ClientBuilder`` to assemble
    one. A client that created its own ``httpx.Client`` closes it in ``close``.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.Client] = None,
        *,
        unmarshaler: Optional[Unmarshaler] = None,
        retry_handler: Optional[RetryHandler] = None,
        transformers: tuple[RequestTransformer, ...] = (),
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            **get_httpx_client_kwargs(config.timeout)
        )

        self._dispatcher = Dispatcher(
            config,
            self._http_client,
            unmarshaler=unmarshaler,
            retry_handler=retry_handler,
            transformers=transformers,
        )
        self._streaming = StreamingDispatcher(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def apply_request_transformers(self, request: httpx.Request) -> httpx.Request:
        return self._dispatcher.apply_request_transformers(request)

    def _make_invoker(self, descriptor: MethodDescriptor) -> Invoker:
        dispatcher = self._streaming if descriptor.is_streaming else self._dispatcher
        arity = len(descriptor.arguments)

        def invoke(*args: Any) -> CallResult:
            if len(args) != arity:
                raise TypeError(
                    f"{descriptor.name}() takes {arity} arguments but {len(args)} were given"
                )
            return dispatcher.dispatch(descriptor, args)

        invoke.__name__ = descriptor.name
        invoke.__qualname__ = descriptor.name
        return invoke

    def init(self, service: Service) -> None:
        """Compile the stubs of ``service`` and bind an invoker to each.

        Nothing is bound unless every stub compiles.

        Raises:
            CompileError: The first compile error found in the declaration.
        """
        descriptors = compile_service(type(service))
        invokers = {
            name: self._make_invoker(descriptor)
            for name, descriptor in descriptors.items()
        }
        service._bind(descriptors, invokers)
        self._logger.debug(
            f"Initialized {type(service).__name__} with {len(invokers)} stubs"
        )

    def close(self) -> None:
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class ClientBuilder:
    """Collects client configuration before the client is built.

    Examples:
        ```python
        client = (
            ClientBuilder()
            .base_url("https://api.example.com")
            .set_unmarshaler(JsonUnmarshaler())
            .set_retry_handler(BasicRetryHandler(3))
            .build()
        )
        ```
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        config = config or ClientConfig()
        self._base_url = config.base_url
        self._timeout = config.timeout
        self._raise_for_status = config.raise_for_status
        self._http_client: Optional[httpx.Client] = None
        self._unmarshaler: Optional[Unmarshaler] = None
        self._retry_handler: Optional[RetryHandler] = None
        self._transformers: list[RequestTransformer] = []

    @classmethod
    def from_env(cls) -> "ClientBuilder":
        return cls(ClientConfig.from_env())

    def base_url(self, base_url: str) -> "ClientBuilder":
        self._base_url = base_url
        return self

    def timeout(self, timeout: Optional[float]) -> "ClientBuilder":
        self._timeout = timeout
        return self

    def raise_for_status(self, enabled: bool = True) -> "ClientBuilder":
        self._raise_for_status = enabled
        return self

    def add_request_transformer(
        self, transformer: RequestTransformer
    ) -> "ClientBuilder":
        """Append a transformer run on every request before it is sent.

        An exception raised by a transformer is returned as a
        ``RequestBuildFailure`` in the stub's failure slot.
        """
        self._transformers.append(transformer)
        return self

    def set_unmarshaler(self, unmarshaler: Optional[Unmarshaler]) -> "ClientBuilder":
        self._unmarshaler = unmarshaler
        return self

    def set_retry_handler(
        self, retry_handler: Optional[RetryHandler]
    ) -> "ClientBuilder":
        self._retry_handler = retry_handler
        return self

    def set_http_client(self, http_client: Optional[httpx.Client]) -> "ClientBuilder":
        self._http_client = http_client
        return self

    def build(self) -> Client:
        config = ClientConfig(
            base_url=self._base_url,
            timeout=self._timeout,
            raise_for_status=self._raise_for_status,
        )
        return Client(
            config,
            self._http_client,
            unmarshaler=self._unmarshaler,
            retry_handler=self._retry_handler,
            transformers=tuple(self._transformers),
        )
