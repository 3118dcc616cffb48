"""
Transport Adapters Module

One adapter per wire protocol, each in a blocking and an asyncio flavour:
- jsonrpc: ``/jsonrpc`` endpoint, faults inside HTTP 200 bodies
- xmlrpc: ``/xmlrpc/2/common`` and ``/xmlrpc/2/object``, XML-RPC faults

All adapters share the request encoder contract and report OpenTelemetry
metrics and spans for each call.
"""

from .adapter_factory import AdapterFactory, AdapterType
from .adapter_interface import AsyncClientAdapterInterface, ClientAdapterInterface, RequestEncoder

__all__ = [
    "AdapterFactory",
    "AdapterType",
    "AsyncClientAdapterInterface",
    "ClientAdapterInterface",
    "RequestEncoder"
]
