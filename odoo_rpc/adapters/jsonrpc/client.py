"""
JSON-RPC adapter

Single endpoint ``{base_url}/jsonrpc``. Login goes to the ``common`` service,
model calls to ``object.execute`` with a flat argument list. Faults come back
as HTTP 200 with an ``error`` member, so success is judged from the body.
"""

import uuid
from typing import Any, Dict, Tuple

from odoo_rpc.adapters.adapter_interface import RequestEncoder
from odoo_rpc.adapters.http_base import AsyncHttpTransport, SyncHttpTransport
from odoo_rpc.operations import Operation, RpcRequest, authenticate_args, execute_args
from odoo_rpc.utils.serialization import decode_jsonrpc_body, dump_json, encode_jsonrpc_body, parse_json

JSONRPC_ENDPOINT = "/jsonrpc"


class JsonRpcEncoder(RequestEncoder):
    """Request envelopes and body codec for the JSON-RPC protocol"""
    
    protocol = "jsonrpc"
    
    def encode_authenticate(self, db: str, username: str, password: str) -> RpcRequest:
        # common.login takes no user-agent environment, unlike common.authenticate
        return RpcRequest(
            endpoint=JSONRPC_ENDPOINT,
            service="common",
            method="login",
            args=tuple(authenticate_args(db, username, password)),
        )
    
    def encode_execute(self, db: str, uid: int, password: str, model: str,
                       operation: Operation, *op_args: Any) -> RpcRequest:
        prefix, args = execute_args(db, uid, password, model, operation, op_args)
        return RpcRequest(
            endpoint=JSONRPC_ENDPOINT,
            service="object",
            method="execute",
            args=tuple(prefix + args),
        )
    
    def _encode_body(self, request: RpcRequest) -> Tuple[bytes, Dict[str, str], str]:
        request_id = str(uuid.uuid4())
        body = encode_jsonrpc_body(request, request_id)
        return (
            dump_json(body),
            {"Content-Type": "application/json"},
            request_id,
        )
    
    def _decode_body(self, content: bytes, request_id: str) -> Any:
        return decode_jsonrpc_body(parse_json(content), request_id)


class JsonRpcClient(JsonRpcEncoder, SyncHttpTransport):
    """Blocking JSON-RPC adapter"""
    pass


class AsyncJsonRpcClient(JsonRpcEncoder, AsyncHttpTransport):
    """asyncio JSON-RPC adapter"""
    pass
