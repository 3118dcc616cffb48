"""
HTTP transport shared by the protocol adapters

Both protocols POST one body to one URL and decode the response body. The
protocol subclasses only supply body encoding/decoding; connection handling,
timeouts, error translation, metrics and tracing live here.
"""

import abc
import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from odoo_rpc.adapters.adapter_interface import AsyncClientAdapterInterface, ClientAdapterInterface
from odoo_rpc.errors import EncodeError, MalformedResponse, ProtocolFault, RequestTimeout, TransportError
from odoo_rpc.operations import RpcRequest
from odoo_rpc.telemetry.metrics import increment_counter, record_latency
from odoo_rpc.telemetry.tracer import create_span, inject_trace_headers

logger = logging.getLogger(__name__)


class HttpTransportBase(abc.ABC):
    """Connection settings and response handling common to sync and async transports"""

    protocol = "http"

    def __init__(self,
                 base_url: str = "http://localhost:8069",
                 timeout_ms: int = 30000,
                 connect_timeout_ms: int = 5000):
        """
        Args:
            base_url: Server base URL, without endpoint path
            timeout_ms: Request timeout (milliseconds)
            connect_timeout_ms: Connection timeout (milliseconds)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self.connect_timeout_ms = connect_timeout_ms
        self.timeout = httpx.Timeout(timeout_ms / 1000.0, connect=connect_timeout_ms / 1000.0)

    @abc.abstractmethod
    def _encode_body(self, request: RpcRequest) -> Tuple[bytes, Dict[str, str], Any]:
        """Serialize a request

        Returns:
            Tuple: (body, headers, context passed back to _decode_body)
        """
        pass

    @abc.abstractmethod
    def _decode_body(self, content: bytes, context: Any) -> Any:
        """Deserialize a response body into the result value"""
        pass

    def url_for(self, request: RpcRequest) -> str:
        return f"{self.base_url}{request.endpoint}"

    def _prepare(self, request: RpcRequest) -> Tuple[str, bytes, Dict[str, str], Any, Dict[str, str]]:
        attributes = {"protocol": self.protocol, "service": request.service, "method": request.method}
        try:
            content, headers, context = self._encode_body(request)
        except EncodeError as e:
            logger.error(f"Cannot encode {request.service}.{request.method} request: {e}")
            increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "encode"})
            raise
        logger.debug(f"Sending {self.protocol} request: {request.service}.{request.method} "
                     f"to {self.url_for(request)} ({len(content)} bytes)")
        increment_counter("odoo_rpc.client.requests", 1, attributes)
        return self.url_for(request), content, inject_trace_headers(headers), context, attributes

    def _transport_error(self, exc: httpx.HTTPError, url: str, attributes: Dict[str, str]) -> TransportError:
        if isinstance(exc, httpx.TimeoutException):
            logger.error(f"Request to {url} timed out ({self.timeout_ms}ms)")
            increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "timeout"})
            return RequestTimeout(f"Request to {url} timed out ({self.timeout_ms}ms)")

        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            logger.error(f"HTTP error {status_code} from {url}")
            increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "http_status"})
            return TransportError(f"HTTP error {status_code} from {url}", status_code=status_code)

        logger.error(f"Connection error for {url}: {exc}")
        increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "connection"})
        return TransportError(f"Connection error for {url}: {exc}")

    def _record_latency(self, start_time: float, attributes: Dict[str, str]) -> float:
        # Covers the HTTP exchange, failed ones included
        latency_ms = (time.time() - start_time) * 1000
        record_latency("odoo_rpc.client.latency", latency_ms, attributes)
        return latency_ms

    def _finish(self, content: bytes, context: Any, latency_ms: float, attributes: Dict[str, str]) -> Any:
        try:
            result = self._decode_body(content, context)
        except ProtocolFault as e:
            logger.error(f"RPC fault in {attributes['method']}: {e}, code: {e.code}")
            increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "fault"})
            raise
        except MalformedResponse as e:
            logger.error(f"Malformed response to {attributes['method']}: {e}")
            increment_counter("odoo_rpc.client.errors", 1, {**attributes, "type": "malformed"})
            raise

        increment_counter("odoo_rpc.client.success", 1, attributes)
        logger.debug(f"Response received, latency: {latency_ms:.2f}ms")
        return result


class SyncHttpTransport(HttpTransportBase, ClientAdapterInterface):
    """Blocking transport on an httpx.Client"""

    def __init__(self,
                 base_url: str = "http://localhost:8069",
                 timeout_ms: int = 30000,
                 connect_timeout_ms: int = 5000,
                 http_client: Optional[httpx.Client] = None):
        """
        Args:
            base_url: Server base URL
            timeout_ms: Request timeout (milliseconds)
            connect_timeout_ms: Connection timeout (milliseconds)
            http_client: Shared client; it is not closed by close()
        """
        super().__init__(base_url, timeout_ms, connect_timeout_ms)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=self.timeout)
        logger.info(f"{self.protocol} client created for {self.base_url}")

    def call(self, request: RpcRequest) -> Any:
        with create_span(f"odoo_rpc.{request.service}.{request.method}",
                         {"rpc.system": self.protocol, "rpc.method": request.method}):
            url, content, headers, context, attributes = self._prepare(request)
            start_time = time.time()
            try:
                response = self.http_client.post(url, content=content, headers=headers, timeout=self.timeout)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise self._transport_error(e, url, attributes) from e
            finally:
                latency_ms = self._record_latency(start_time, attributes)

            return self._finish(response.content, context, latency_ms, attributes)

    def close(self) -> None:
        if self._owns_client and not self.http_client.is_closed:
            self.http_client.close()


class AsyncHttpTransport(HttpTransportBase, AsyncClientAdapterInterface):
    """asyncio transport on an httpx.AsyncClient"""

    def __init__(self,
                 base_url: str = "http://localhost:8069",
                 timeout_ms: int = 30000,
                 connect_timeout_ms: int = 5000,
                 http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(base_url, timeout_ms, connect_timeout_ms)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=self.timeout)
        logger.info(f"async {self.protocol} client created for {self.base_url}")

    async def call(self, request: RpcRequest) -> Any:
        with create_span(f"odoo_rpc.{request.service}.{request.method}",
                         {"rpc.system": self.protocol, "rpc.method": request.method}):
            url, content, headers, context, attributes = self._prepare(request)
            start_time = time.time()
            try:
                response = await self.http_client.post(url, content=content, headers=headers, timeout=self.timeout)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise self._transport_error(e, url, attributes) from e
            finally:
                latency_ms = self._record_latency(start_time, attributes)

            return self._finish(response.content, context, latency_ms, attributes)

    async def close(self) -> None:
        if self._owns_client and not self.http_client.is_closed:
            await self.http_client.aclose()
