from typing import Optional


class RestBindError(Exception):
    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(self.message)


class CompileError(RestBindError):
    """Raised while compiling a service declaration.

    Compilation is all-or-nothing, so the first compile error aborts the
    registration of every stub in the declared service.
    """


class InvalidSignature(CompileError):
    pass


class UnsupportedMethod(CompileError):
    def __init__(self, method: Optional[str]):
        self.method = method
        super().__init__(f"Unsupported method: {method}")


class MultipleBodyFields(CompileError):
    def __init__(self, message="Only one body per request is supported."):
        super().__init__(message)


class BodyFieldConflict(CompileError):
    """Form fields and an explicit body were combined in one request.

    Raised by the compiler. The call-time recheck returns the
    ``RequestBodyConflict`` subclass instead.
    """

    def __init__(
        self, message="Requests cannot have form fields and an explicit body."
    ):
        super().__init__(message)


class CallFailure(RestBindError):
    """Base class for failures returned in the failure slot of a stub call."""


class RequestBuildFailure(CallFailure):
    pass


class TransportFailure(CallFailure):
    pass


class StatusFailure(TransportFailure):
    """A response arrived with a non-2xx status while status checking is on."""

    def __init__(self, status_code: int, body: bytes, message: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Unexpected status code: {status_code}")


class DecodeFailure(CallFailure):
    pass


class RequestBodyConflict(BodyFieldConflict, RequestBuildFailure):
    """The call-time form of ``BodyFieldConflict``, returned as a call failure."""
