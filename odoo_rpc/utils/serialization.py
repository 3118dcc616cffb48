"""
Wire body serialization

Converts RpcRequest envelopes to JSON-RPC and XML-RPC request bodies, and
response bodies back to decoded Python values, translating in-band errors
(JSON-RPC ``error`` members, XML-RPC faults) into ProtocolFault.

Both encoders send dates and datetimes as the server's text format, and
report unserializable arguments as EncodeError.
"""

import datetime
import json
import xmlrpc.client
from typing import Any, Dict, Optional, Tuple, Union
from xml.parsers.expat import ExpatError

from odoo_rpc.errors import EncodeError, MalformedResponse, ProtocolFault
from odoo_rpc.operations import RpcRequest

SERVER_DATE_FORMAT = "%Y-%m-%d"
SERVER_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_server_date(value: datetime.date) -> str:
    if isinstance(value, datetime.datetime):
        return value.strftime(SERVER_DATETIME_FORMAT)
    return value.strftime(SERVER_DATE_FORMAT)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return format_server_date(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_jsonrpc_body(request: RpcRequest, request_id: str) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 ``call`` body

    Args:
        request: Encoded request
        request_id: Id echoed back by the server

    Returns:
        Dict: JSON-serializable request body
    """
    return {
        "jsonrpc": "2.0",
        "method": "call",
        "params": {
            "service": request.service,
            "method": request.method,
            "args": list(request.args),
        },
        "id": request_id,
    }


def dump_json(body: Dict[str, Any]) -> bytes:
    """Serialize a JSON-RPC body

    Raises:
        EncodeError: Body holds a value JSON cannot represent (or a reference cycle)
    """
    try:
        return json.dumps(body, default=_json_default).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Cannot encode JSON-RPC request: {e}") from e


def parse_json(content: bytes) -> Any:
    if not content:
        raise MalformedResponse("Empty JSON-RPC response body")
    try:
        return json.loads(content)
    except ValueError as e:
        raise MalformedResponse(f"Response body is not JSON: {e}") from e


def decode_jsonrpc_body(body: Any, request_id: str) -> Any:
    """Extract the result of a JSON-RPC response body

    The server answers HTTP 200 for faults too, so failure is detected from the
    body alone.

    Args:
        body: Parsed response body
        request_id: Id sent with the request

    Returns:
        Any: Value of the ``result`` member

    Raises:
        ProtocolFault: Body carries an ``error`` member
        MalformedResponse: Body is not an object, has neither member, or answers another id
    """
    if not isinstance(body, dict):
        raise MalformedResponse(f"JSON-RPC response is not an object: {body!r}")

    response_id = body.get("id")
    if response_id is not None and response_id != request_id:
        raise MalformedResponse(f"Response id mismatch: {response_id} != {request_id}")

    if "error" in body:
        error = body["error"]
        if not isinstance(error, dict):
            error = {"message": str(error)}
        data = error.get("data")
        if not isinstance(data, dict):
            data = {}
        message = data.get("message") or error.get("message") or "Server error"
        raise ProtocolFault(message, code=error.get("code"), data=data)

    if "result" not in body:
        raise MalformedResponse("JSON-RPC response has neither 'result' nor 'error'")

    return body["result"]


class ServerMarshaller(xmlrpc.client.Marshaller):
    """Marshaller for the server's XML-RPC dialect

    Integers outside the 32-bit ``<int>`` range are written as ``<i8>``, and
    dates/datetimes as text in the server's format.
    """

    dispatch = dict(xmlrpc.client.Marshaller.dispatch)

    def dump_long(self, value, write):
        tag = "int" if xmlrpc.client.MININT <= value <= xmlrpc.client.MAXINT else "i8"
        write(f"<value><{tag}>{int(value)}</{tag}></value>\n")
    dispatch[int] = dump_long

    def dump_date(self, value, write):
        self.dump_unicode(format_server_date(value), write)
    dispatch[datetime.date] = dump_date
    dispatch[datetime.datetime] = dump_date


def dump_xmlrpc(params: Union[Tuple[Any, ...], xmlrpc.client.Fault],
                methodname: Optional[str] = None) -> bytes:
    """Serialize a ``methodCall`` (with ``methodname``) or a ``methodResponse``

    Same framing as ``xmlrpc.client.dumps``, with ServerMarshaller.
    """
    data = ServerMarshaller("utf-8", allow_none=True).dumps(params)
    if methodname:
        body = (
            "<?xml version='1.0'?>\n<methodCall>\n"
            f"<methodName>{xmlrpc.client.escape(methodname)}</methodName>\n"
            f"{data}</methodCall>\n"
        )
    else:
        body = f"<?xml version='1.0'?>\n<methodResponse>\n{data}</methodResponse>\n"
    return body.encode("utf-8")


def encode_xmlrpc_body(request: RpcRequest) -> bytes:
    """Build an XML-RPC ``methodCall`` body

    Raises:
        EncodeError: An argument has no XML-RPC representation
    """
    try:
        return dump_xmlrpc(tuple(request.args), methodname=request.method)
    except TypeError as e:
        raise EncodeError(f"Cannot encode XML-RPC request: {e}") from e


def decode_xmlrpc_body(content: bytes) -> Any:
    """Extract the single return value of an XML-RPC ``methodResponse``

    Raises:
        ProtocolFault: Response is a fault
        MalformedResponse: Response is not a well-formed single-value response
    """
    try:
        params, _ = xmlrpc.client.loads(content, use_builtin_types=True)
    except xmlrpc.client.Fault as fault:
        raise ProtocolFault(
            fault.faultString,
            code=fault.faultCode,
            data={"message": fault.faultString},
        ) from fault
    except (ExpatError, xmlrpc.client.ResponseError, ValueError) as e:
        raise MalformedResponse(f"Invalid XML-RPC response: {e}") from e

    if len(params) != 1:
        raise MalformedResponse(f"XML-RPC response carries {len(params)} values, expected 1")
    return params[0]
