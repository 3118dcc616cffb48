"""
JSON-RPC Adapter Package

Blocking and asyncio adapters for the ``/jsonrpc`` endpoint.
"""

from odoo_rpc.adapters.jsonrpc.client import AsyncJsonRpcClient, JsonRpcClient, JsonRpcEncoder

__all__ = ["JsonRpcClient", "AsyncJsonRpcClient", "JsonRpcEncoder"]
