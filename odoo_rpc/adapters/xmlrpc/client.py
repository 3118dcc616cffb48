"""
XML-RPC adapter

Two endpoints: ``{base_url}/xmlrpc/2/common`` for authentication and
``{base_url}/xmlrpc/2/object`` for ``execute_kw``, whose operation arguments
travel as one nested list. Errors arrive as XML-RPC faults.
"""

from typing import Any, Dict, Tuple

from odoo_rpc.adapters.adapter_interface import RequestEncoder
from odoo_rpc.adapters.http_base import AsyncHttpTransport, SyncHttpTransport
from odoo_rpc.operations import Operation, RpcRequest, authenticate_args, execute_args
from odoo_rpc.utils.serialization import decode_xmlrpc_body, encode_xmlrpc_body

XMLRPC_COMMON_ENDPOINT = "/xmlrpc/2/common"
XMLRPC_OBJECT_ENDPOINT = "/xmlrpc/2/object"


class XmlRpcEncoder(RequestEncoder):
    """Request envelopes and body codec for the XML-RPC protocol"""
    
    protocol = "xmlrpc"
    
    def encode_authenticate(self, db: str, username: str, password: str) -> RpcRequest:
        # Trailing {} is the empty user-agent environment
        return RpcRequest(
            endpoint=XMLRPC_COMMON_ENDPOINT,
            service="common",
            method="authenticate",
            args=tuple(authenticate_args(db, username, password) + [{}]),
        )
    
    def encode_execute(self, db: str, uid: int, password: str, model: str,
                       operation: Operation, *op_args: Any) -> RpcRequest:
        prefix, args = execute_args(db, uid, password, model, operation, op_args)
        return RpcRequest(
            endpoint=XMLRPC_OBJECT_ENDPOINT,
            service="object",
            method="execute_kw",
            args=tuple(prefix + [args]),
        )
    
    def _encode_body(self, request: RpcRequest) -> Tuple[bytes, Dict[str, str], None]:
        return encode_xmlrpc_body(request), {"Content-Type": "text/xml"}, None
    
    def _decode_body(self, content: bytes, context: None) -> Any:
        return decode_xmlrpc_body(content)


class XmlRpcClient(XmlRpcEncoder, SyncHttpTransport):
    """Blocking XML-RPC adapter"""
    pass


class AsyncXmlRpcClient(XmlRpcEncoder, AsyncHttpTransport):
    """asyncio XML-RPC adapter"""
    pass
