"""
Transport adapter interface

Every protocol adapter (JSON-RPC, XML-RPC) implements the same two halves:
a request encoder, which turns a logical operation into an RpcRequest, and a
transport, which sends it and returns the decoded result. The record-set
client depends only on these interfaces, never on a protocol.
"""

import abc
from typing import Any

from odoo_rpc.operations import Operation, RpcRequest


class RequestEncoder(abc.ABC):
    """Builds protocol-specific request envelopes"""
    
    @abc.abstractmethod
    def encode_authenticate(self, db: str, username: str, password: str) -> RpcRequest:
        """Encode the login call
        
        Args:
            db: Database name
            username: Login
            password: Password or API key
            
        Returns:
            RpcRequest: Request whose result is the user id, or ``false``
        """
        pass
    
    @abc.abstractmethod
    def encode_execute(self,
                       db: str,
                       uid: int,
                       password: str,
                       model: str,
                       operation: Operation,
                       *op_args: Any) -> RpcRequest:
        """Encode a model method call
        
        Args:
            db: Database name
            uid: Authenticated user id
            password: Password or API key
            model: Target model, e.g. ``res.partner``
            operation: Model method
            op_args: Operation arguments in their fixed order
            
        Returns:
            RpcRequest: Encoded request
        """
        pass


class ClientAdapterInterface(RequestEncoder):
    """Blocking adapter: one request per call, the caller waits for the result"""
    
    @abc.abstractmethod
    def call(self, request: RpcRequest) -> Any:
        """Send a request and return the decoded result
        
        Args:
            request: Request built by this adapter's encoder
            
        Returns:
            Any: Decoded result value
            
        Raises:
            TransportError: Connection, timeout or HTTP failure
            ProtocolFault: Server returned an error
            MalformedResponse: Response could not be interpreted
        """
        pass
    
    @abc.abstractmethod
    def close(self) -> None:
        """Close connections and release resources"""
        pass


class AsyncClientAdapterInterface(RequestEncoder):
    """asyncio adapter, same contract as ClientAdapterInterface"""
    
    @abc.abstractmethod
    async def call(self, request: RpcRequest) -> Any:
        pass
    
    @abc.abstractmethod
    async def close(self) -> None:
        pass
