"""
XML-RPC Adapter Package

Blocking and asyncio adapters for the ``/xmlrpc/2`` endpoints.
"""

from odoo_rpc.adapters.xmlrpc.client import AsyncXmlRpcClient, XmlRpcClient, XmlRpcEncoder

__all__ = ["XmlRpcClient", "AsyncXmlRpcClient", "XmlRpcEncoder"]
