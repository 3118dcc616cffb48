"""
Adapter factory

Creates transport adapters for the configured wire protocol, so callers pick
a protocol by name and receive an object implementing the adapter interface.
"""

from typing import Dict, Any

from odoo_rpc.adapters.adapter_interface import AsyncClientAdapterInterface, ClientAdapterInterface
from odoo_rpc.adapters.jsonrpc.client import AsyncJsonRpcClient, JsonRpcClient
from odoo_rpc.adapters.xmlrpc.client import AsyncXmlRpcClient, XmlRpcClient

class AdapterType:
    """Adapter type constants"""
    JSONRPC = "jsonrpc"
    XMLRPC = "xmlrpc"

    ALL = (JSONRPC, XMLRPC)

_SYNC_ADAPTERS = {
    AdapterType.JSONRPC: JsonRpcClient,
    AdapterType.XMLRPC: XmlRpcClient,
}

_ASYNC_ADAPTERS = {
    AdapterType.JSONRPC: AsyncJsonRpcClient,
    AdapterType.XMLRPC: AsyncXmlRpcClient,
}

def _adapter_kwargs(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "base_url": config.get("base_url", "http://localhost:8069"),
        "timeout_ms": config.get("timeout_ms", 30000),
        "connect_timeout_ms": config.get("connect_timeout_ms", 5000),
        "http_client": config.get("http_client"),
    }

def _lookup(adapters: Dict[str, type], adapter_type: str) -> type:
    try:
        return adapters[adapter_type.lower()]
    except KeyError:
        raise ValueError(f"Invalid adapter type: {adapter_type}") from None

class AdapterFactory:
    """Adapter factory, creates transport adapter instances"""
    
    @staticmethod
    def create_client(adapter_type: str, config: Dict[str, Any] = None) -> ClientAdapterInterface:
        """Create a blocking adapter
        
        Args:
            adapter_type: Adapter type, "jsonrpc" or "xmlrpc"
            config: base_url, timeout_ms, connect_timeout_ms, http_client
            
        Returns:
            ClientAdapterInterface: Adapter instance
            
        Raises:
            ValueError: Invalid adapter type
        """
        return _lookup(_SYNC_ADAPTERS, adapter_type)(**_adapter_kwargs(config or {}))
    
    @staticmethod
    def create_async_client(adapter_type: str, config: Dict[str, Any] = None) -> AsyncClientAdapterInterface:
        """Create an asyncio adapter (same arguments as create_client)"""
        return _lookup(_ASYNC_ADAPTERS, adapter_type)(**_adapter_kwargs(config or {}))
