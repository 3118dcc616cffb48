"""
Authenticated session

A Session is the result of one successful login: the connection parameters
plus the numeric user id every model call must carry. It never changes after
construction; logging in again means building a new Session.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from odoo_rpc.adapters.adapter_interface import AsyncClientAdapterInterface, ClientAdapterInterface
from odoo_rpc.errors import AuthenticationError
from odoo_rpc.types import Credentials, PresentOrAbsent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    url: str
    db: str
    username: str
    password: str = field(repr=False)
    uid: int = 0

    @classmethod
    def authenticate(cls, adapter: ClientAdapterInterface, credentials: Credentials) -> "Session":
        """Log in over a blocking adapter

        Raises:
            AuthenticationError: Server refused the credentials
            TransportError, ProtocolFault, MalformedResponse: Login call failed
            DecodeError: Server returned something other than a user id
        """
        request = adapter.encode_authenticate(credentials.db, credentials.username, credentials.password)
        return cls._from_login(credentials, adapter.call(request))

    @classmethod
    async def authenticate_async(cls, adapter: AsyncClientAdapterInterface, credentials: Credentials) -> "Session":
        """Log in over an asyncio adapter (see authenticate)"""
        request = adapter.encode_authenticate(credentials.db, credentials.username, credentials.password)
        return cls._from_login(credentials, await adapter.call(request))

    @classmethod
    def _from_login(cls, credentials: Credentials, result: Any) -> "Session":
        uid = PresentOrAbsent.from_wire(result, int)
        if uid.is_absent:
            logger.error(f"Authentication failed for {credentials.username} on {credentials.db}")
            raise AuthenticationError(
                f"Authentication failed for user {credentials.username!r} on database {credentials.db!r}"
            )

        logger.info(f"Authenticated {credentials.username} on {credentials.db} as uid {uid.value}")
        return cls(
            url=credentials.base_url,
            db=credentials.db,
            username=credentials.username,
            password=credentials.password,
            uid=uid.value,
        )
