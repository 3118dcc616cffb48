"""
Record-set client

A client holds a model name and an ordered list of record ids, and exposes
the model methods as chainable calls:

    client.env("res.partner").browse([1, 2]).write({"active": False})
    name = client.env("res.partner").browse(1).get("name", str)

Each call issues at most one request and waits for it before touching the
client's state, so a call that raises leaves the model and ids as they were.
Client is blocking; AsyncClient offers the same surface as coroutines.
"""

import logging
from typing import Any, List, Optional, Sequence

from odoo_rpc.adapters.adapter_factory import AdapterFactory, AdapterType
from odoo_rpc.adapters.adapter_interface import AsyncClientAdapterInterface, ClientAdapterInterface
from odoo_rpc.config import DEFAULT_MODEL, ClientConfig
from odoo_rpc.errors import FieldMissingError, NoRecordError
from odoo_rpc.operations import Operation, RpcRequest
from odoo_rpc.session import Session
from odoo_rpc.telemetry.metrics import setup_metrics
from odoo_rpc.telemetry.tracer import setup_tracer
from odoo_rpc.types import Credentials, OneOrMany, decode_value, normalize_ids

logger = logging.getLogger(__name__)


def _setup_telemetry(config: ClientConfig) -> None:
    if config.enable_tracing:
        setup_tracer(config.service_name, config.otlp_endpoint)
        setup_metrics(config.service_name, config.otlp_endpoint)


class _RecordSet:
    """Model/ids state and response handling shared by Client and AsyncClient"""

    def __init__(self, session: Session, adapter: Any, model: Optional[str] = None,
                 owns_adapter: bool = True):
        self.session = session
        self.adapter = adapter
        self.model = model or DEFAULT_MODEL
        self.records: List[int] = []
        self._owns_adapter = owns_adapter

    @property
    def uid(self) -> int:
        return self.session.uid

    def env(self, model: str):
        """Switch the target model; ids are kept as they are"""
        self.model = model
        return self

    def browse(self, ids: Any):
        """Select records by a single id or a sequence of ids"""
        self.records = normalize_ids(ids)
        return self

    def ids(self) -> List[int]:
        return list(self.records)

    def clone(self):
        """New client on the same session and adapter, with its own copy of the ids

        The clone does not own the adapter: closing it leaves the original usable.
        """
        other = type(self)(self.session, self.adapter, self.model, owns_adapter=False)
        other.records = self.ids()
        return other

    def _request(self, operation: Operation, *op_args: Any) -> RpcRequest:
        return self.adapter.encode_execute(
            self.session.db,
            self.session.uid,
            self.session.password,
            self.model,
            operation,
            *op_args,
        )

    def _require_records(self, field: str) -> None:
        if not self.records:
            raise NoRecordError(f"Cannot get {field!r}: no {self.model} record selected")

    def _ids_from(self, result: Any) -> List[int]:
        return OneOrMany.from_wire(result, int).to_list()

    def _field_from(self, result: Any, field: str, type_: Any) -> Any:
        records = OneOrMany.from_wire(result, dict).to_list()
        if not records:
            raise NoRecordError(f"Read on {self} returned no records")
        record = records[0]
        if field not in record:
            raise FieldMissingError(field)
        return decode_value(record[field], type_)

    def __str__(self) -> str:
        return f"{self.model}({', '.join(str(record_id) for record_id in self.records)})"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self} uid={self.uid} db={self.session.db!r}>"


class Client(_RecordSet):
    """Blocking record-set client"""

    adapter: ClientAdapterInterface

    @classmethod
    def connect(cls,
                credentials: Credentials,
                model: Optional[str] = None,
                adapter_type: str = AdapterType.JSONRPC,
                **adapter_config: Any) -> "Client":
        """Create an adapter, log in and return a client bound to the session

        Args:
            credentials: Server URL, database and login
            model: Initial model (``res.users`` when omitted)
            adapter_type: "jsonrpc" or "xmlrpc"
            adapter_config: timeout_ms, connect_timeout_ms, http_client

        Raises:
            AuthenticationError: Credentials refused
            OdooRpcError: Login request failed
        """
        adapter = AdapterFactory.create_client(
            adapter_type, {**adapter_config, "base_url": credentials.base_url}
        )
        try:
            session = Session.authenticate(adapter, credentials)
        except Exception:
            adapter.close()
            raise
        return cls(session, adapter, model)

    @classmethod
    def from_config(cls, config: ClientConfig, **adapter_config: Any) -> "Client":
        _setup_telemetry(config)
        return cls.connect(
            config.credentials(),
            model=config.default_model,
            adapter_type=config.adapter_type,
            **{**config.adapter_config(), **adapter_config},
        )

    def create(self, values: Any) -> "Client":
        """Create record(s); the ids become the new record ids"""
        result = self.adapter.call(self._request(Operation.CREATE, values))
        self.records = self._ids_from(result)
        logger.debug(f"create -> {self}")
        return self

    def write(self, values: Any) -> "Client":
        """Update the current records (an empty id list is sent as-is)"""
        result = self.adapter.call(self._request(Operation.WRITE, self.ids(), values))
        logger.debug(f"write on {self} -> {result!r}")
        return self

    def search(self, domain: Any) -> "Client":
        """Replace the ids with the records matching ``domain``"""
        result = self.adapter.call(self._request(Operation.SEARCH, domain))
        self.records = self._ids_from(result)
        logger.debug(f"search -> {self}")
        return self

    def search_read(self, domain: Any, fields: Optional[Sequence[str]] = None) -> Any:
        """Search and read in one call; returns the decoded result unmodified"""
        return self.adapter.call(self._request(Operation.SEARCH_READ, domain, list(fields or [])))

    def read(self, fields: Optional[Sequence[str]] = None) -> Any:
        """Read the current records; returns the decoded result unmodified"""
        return self.adapter.call(self._request(Operation.READ, self.ids(), list(fields or [])))

    def get(self, field: str, type_: Any = None) -> Any:
        """Read one field of the first current record

        Args:
            field: Field name
            type_: Optional target type (``str``, ``PresentOrAbsent[str]``...)

        Raises:
            NoRecordError: No ids selected (nothing is sent) or no record returned
            FieldMissingError: Field absent from the returned record
            DecodeError: Value does not convert to ``type_``
        """
        self._require_records(field)
        result = self.adapter.call(self._request(Operation.READ, self.ids(), [field]))
        return self._field_from(result, field, type_)

    def unlink(self) -> "Client":
        """Delete the current records; the ids are cleared once the server confirms"""
        self.adapter.call(self._request(Operation.UNLINK, self.ids()))
        self.records = []
        return self

    def close(self) -> None:
        if self._owns_adapter:
            self.adapter.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncClient(_RecordSet):
    """asyncio record-set client; env, browse, ids and clone stay synchronous"""

    adapter: AsyncClientAdapterInterface

    @classmethod
    async def connect(cls,
                      credentials: Credentials,
                      model: Optional[str] = None,
                      adapter_type: str = AdapterType.JSONRPC,
                      **adapter_config: Any) -> "AsyncClient":
        adapter = AdapterFactory.create_async_client(
            adapter_type, {**adapter_config, "base_url": credentials.base_url}
        )
        try:
            session = await Session.authenticate_async(adapter, credentials)
        except Exception:
            await adapter.close()
            raise
        return cls(session, adapter, model)

    @classmethod
    async def from_config(cls, config: ClientConfig, **adapter_config: Any) -> "AsyncClient":
        _setup_telemetry(config)
        return await cls.connect(
            config.credentials(),
            model=config.default_model,
            adapter_type=config.adapter_type,
            **{**config.adapter_config(), **adapter_config},
        )

    async def create(self, values: Any) -> "AsyncClient":
        result = await self.adapter.call(self._request(Operation.CREATE, values))
        self.records = self._ids_from(result)
        logger.debug(f"create -> {self}")
        return self

    async def write(self, values: Any) -> "AsyncClient":
        result = await self.adapter.call(self._request(Operation.WRITE, self.ids(), values))
        logger.debug(f"write on {self} -> {result!r}")
        return self

    async def search(self, domain: Any) -> "AsyncClient":
        result = await self.adapter.call(self._request(Operation.SEARCH, domain))
        self.records = self._ids_from(result)
        logger.debug(f"search -> {self}")
        return self

    async def search_read(self, domain: Any, fields: Optional[Sequence[str]] = None) -> Any:
        return await self.adapter.call(self._request(Operation.SEARCH_READ, domain, list(fields or [])))

    async def read(self, fields: Optional[Sequence[str]] = None) -> Any:
        return await self.adapter.call(self._request(Operation.READ, self.ids(), list(fields or [])))

    async def get(self, field: str, type_: Any = None) -> Any:
        self._require_records(field)
        result = await self.adapter.call(self._request(Operation.READ, self.ids(), [field]))
        return self._field_from(result, field, type_)

    async def unlink(self) -> "AsyncClient":
        await self.adapter.call(self._request(Operation.UNLINK, self.ids()))
        self.records = []
        return self

    async def close(self) -> None:
        if self._owns_adapter:
            await self.adapter.close()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
