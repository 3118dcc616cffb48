"""
odoo_rpc - record-set client for Odoo-style business-object servers

Talks to the server over either of its two RPC protocols (JSON-RPC or
XML-RPC) through one chainable API:

1. Session: one login round trip yields the user id used by every call
2. Client / AsyncClient: model + record ids, with create/write/search/read/unlink
3. Value model: OneOrMany and PresentOrAbsent absorb the server's loose typing
"""

from odoo_rpc.adapters import AdapterFactory, AdapterType
from odoo_rpc.client import AsyncClient, Client
from odoo_rpc.config import ClientConfig
from odoo_rpc.errors import (
    AuthenticationError,
    DecodeError,
    EncodeError,
    FieldMissingError,
    MalformedResponse,
    NoRecordError,
    OdooRpcError,
    ProtocolFault,
    RequestTimeout,
    TransportError,
)
from odoo_rpc.operations import Operation, RpcRequest
from odoo_rpc.session import Session
from odoo_rpc.types import Credentials, OneOrMany, PresentOrAbsent, decode_value, normalize_ids

__version__ = "0.1.0"

__all__ = [
    "AdapterFactory",
    "AdapterType",
    "AsyncClient",
    "Client",
    "ClientConfig",
    "Credentials",
    "OneOrMany",
    "PresentOrAbsent",
    "Operation",
    "RpcRequest",
    "Session",
    "decode_value",
    "normalize_ids",
    "OdooRpcError",
    "TransportError",
    "RequestTimeout",
    "ProtocolFault",
    "AuthenticationError",
    "MalformedResponse",
    "NoRecordError",
    "FieldMissingError",
    "EncodeError",
    "DecodeError",
]
