"""
Client error taxonomy

Every failure raised by odoo_rpc derives from OdooRpcError so callers can catch
the whole family, or a single branch of it:

- TransportError: the HTTP exchange itself failed (connection, timeout, HTTP status)
- ProtocolFault: the server answered, but with a JSON-RPC error or an XML-RPC fault
- MalformedResponse: the answer does not have the shape the operation expects
- EncodeError: request arguments could not be serialized (nothing was sent)
- DecodeError: an extracted value could not be converted to the requested type
"""

from typing import Any, Optional


class OdooRpcError(Exception):
    """Base exception for odoo_rpc errors."""
    pass


class TransportError(OdooRpcError):
    """Connection or HTTP-layer failure."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RequestTimeout(TransportError):
    """The request did not complete within the configured timeout."""
    pass


class ProtocolFault(OdooRpcError):
    """Server-reported error inside an otherwise successful exchange."""

    def __init__(self, message: str, *, code: Any = None, data: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.data = data or {}

    @property
    def name(self) -> Optional[str]:
        """Server-side exception class name, when the server sent one."""
        return self.data.get("name")

    @property
    def debug(self) -> Optional[str]:
        return self.data.get("debug")


class AuthenticationError(ProtocolFault):
    """Login was refused (the server answered ``false``)."""
    pass


class MalformedResponse(OdooRpcError):
    """Result shape does not match what the operation expects."""
    pass


class NoRecordError(MalformedResponse):
    """``get`` had no record to read from."""
    pass


class FieldMissingError(MalformedResponse):

    def __init__(self, field: str):
        super().__init__(f"Field {field!r} not included in read result")
        self.field = field


class EncodeError(OdooRpcError):
    """A request argument could not be serialized for the wire."""
    pass


class DecodeError(OdooRpcError):
    """Typed deserialization of an extracted value failed."""
    pass
