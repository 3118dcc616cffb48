"""
Shared fixtures: an in-memory server speaking both RPC protocols

The fake server is plugged into httpx through MockTransport, so adapters and
clients run their real encoding, HTTP and decoding paths without a network.
"""

import json
import xmlrpc.client
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx
import pytest

from odoo_rpc import AdapterType, Client, Credentials
from odoo_rpc.utils.serialization import dump_xmlrpc

CREDENTIALS = Credentials(
    url="http://localhost:8069",
    db="testdb",
    username="demo",
    password="demo",
)

PROTOCOLS = [AdapterType.JSONRPC, AdapterType.XMLRPC]


@dataclass
class RecordedCall:
    """One request as seen by the server"""
    protocol: str
    path: str
    method: str
    args: List[Any]
    operation: str
    op_args: List[Any]


class Fault:
    """Response placeholder that makes the server answer with an error"""

    def __init__(self, message: str, code: int = 200, name: str = "odoo.exceptions.UserError"):
        self.message = message
        self.code = code
        self.name = name


class FakeOdooServer:
    """Minimal JSON-RPC and XML-RPC endpoint with scripted responses"""

    def __init__(self, uid: int = 2):
        self.uid = uid
        self.calls: List[RecordedCall] = []
        self.responses: Dict[str, Any] = {}

    def respond(self, operation: str, result: Any) -> None:
        """Script the result of an operation (a value, a callable or a Fault)"""
        self.responses[operation] = result

    def fail(self, operation: str, message: str, code: int = 200) -> None:
        self.responses[operation] = Fault(message, code=code)

    def model_calls(self) -> List[RecordedCall]:
        return [call for call in self.calls if call.operation != "login"]

    def _default(self, operation: str, op_args: List[Any]) -> Any:
        if operation == "login":
            return self.uid
        if operation == "create":
            return 42
        if operation == "search":
            return [1, 2, 3]
        if operation == "read":
            return [{"id": record_id, "name": f"Record {record_id}"} for record_id in op_args[0]]
        if operation == "search_read":
            return [{"id": 1, "name": "Azure Interior"}]
        return True

    def _outcome(self, operation: str, op_args: List[Any]) -> Any:
        if operation not in self.responses:
            return self._default(operation, op_args)
        scripted = self.responses[operation]
        if callable(scripted):
            return scripted(op_args)
        return scripted

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/jsonrpc":
            return self._handle_json(request)
        if path.startswith("/xmlrpc/2/"):
            return self._handle_xml(request)
        return httpx.Response(404, text="not found")

    def _handle_json(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        params = body["params"]
        args = params["args"]
        if params["method"] == "login":
            operation, op_args = "login", []
        else:
            operation, op_args = args[4], args[5:]
        self.calls.append(RecordedCall("jsonrpc", "/jsonrpc", params["method"], args, operation, op_args))

        outcome = self._outcome(operation, op_args)
        if isinstance(outcome, Fault):
            error = {
                "code": outcome.code,
                "message": "Odoo Server Error",
                "data": {"name": outcome.name, "debug": "Traceback ...", "message": outcome.message},
            }
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": error})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": outcome})

    def _handle_xml(self, request: httpx.Request) -> httpx.Response:
        params, method = xmlrpc.client.loads(request.content)
        args = list(params)
        if method == "authenticate":
            operation, op_args = "login", []
        else:
            operation, op_args = args[4], list(args[5])
        self.calls.append(RecordedCall("xmlrpc", request.url.path, method, args, operation, op_args))

        outcome = self._outcome(operation, op_args)
        if isinstance(outcome, Fault):
            content = dump_xmlrpc(xmlrpc.client.Fault(outcome.code, outcome.message))
        else:
            content = dump_xmlrpc((outcome,))
        return httpx.Response(200, content=content, headers={"Content-Type": "text/xml"})


@pytest.fixture
def credentials():
    return CREDENTIALS


@pytest.fixture
def fake_server():
    return FakeOdooServer()


@pytest.fixture
def http_client(fake_server):
    client = httpx.Client(transport=httpx.MockTransport(fake_server.handler))
    yield client
    client.close()


@pytest.fixture(params=PROTOCOLS)
def protocol(request):
    return request.param


@pytest.fixture
def client(fake_server, http_client, protocol):
    """Client logged in to the fake server, once per protocol"""
    odoo = Client.connect(CREDENTIALS, adapter_type=protocol, http_client=http_client)
    yield odoo
    odoo.close()
