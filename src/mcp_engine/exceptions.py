from typing import Any

from mcp_engine.types.json_rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RESOURCE_NOT_FOUND,
    SERVER_NOT_INITIALIZED,
    ErrorData,
)


class McpError(Exception):
    """Exception raised while routing a message, carrying the JSON-RPC error to answer with.

    Attributes:
        error: The ErrorData object that is sent back to the client, containing
               error code, message, and optional additional data
    """

    error: ErrorData

    def __init__(self, error: ErrorData):
        super().__init__(error.message)
        self.error = error

    @classmethod
    def create(cls, code: int, message: str, data: Any | None = None) -> "McpError":
        return cls(ErrorData(code=code, message=message, data=data))

    @property
    def code(self) -> int:
        return self.error.code


def parse_error() -> McpError:
    return McpError.create(PARSE_ERROR, "Invalid JSON")


def invalid_request(message: str = "Invalid Request") -> McpError:
    return McpError.create(INVALID_REQUEST, message)


def method_not_found(method: str) -> McpError:
    return McpError.create(METHOD_NOT_FOUND, "Method not found", {"method": method})


def not_initialized() -> McpError:
    return McpError.create(SERVER_NOT_INITIALIZED, "Server not initialized")


def invalid_params(message: str) -> McpError:
    return McpError.create(INVALID_PARAMS, message)


def resource_not_found(uri: str) -> McpError:
    return McpError.create(RESOURCE_NOT_FOUND, "Resource not found", {"uri": uri})


def handler_failed(prefix: str, exc: BaseException) -> McpError:
    return McpError.create(INTERNAL_ERROR, f"{prefix}: {exc}")
