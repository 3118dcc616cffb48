"""
AsyncClient tests against the in-memory server
"""

import httpx
import pytest

from odoo_rpc import AdapterType, AsyncClient, AuthenticationError, NoRecordError, ProtocolFault


async def connect(server, credentials, protocol=AdapterType.JSONRPC, model=None):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    odoo = await AsyncClient.connect(credentials, model=model, adapter_type=protocol, http_client=http_client)
    return odoo, http_client


@pytest.mark.asyncio
async def test_get_name(fake_server, credentials, protocol):
    odoo, http_client = await connect(fake_server, credentials, protocol)

    name = await odoo.env("res.partner").browse(1).get("name", str)

    assert name == "Record 1"
    (call,) = fake_server.model_calls()
    assert call.args[:5] == ["testdb", 2, "demo", "res.partner", "read"]
    assert call.op_args == [[1], ["name"]]
    await odoo.close()
    await http_client.aclose()


@pytest.mark.asyncio
async def test_state_transitions(fake_server, credentials, protocol):
    fake_server.respond("search", [7, 8])
    odoo, http_client = await connect(fake_server, credentials, protocol, model="res.partner")

    await odoo.search([["is_company", "=", True]])
    assert odoo.ids() == [7, 8]

    await odoo.write({"active": False})
    assert odoo.ids() == [7, 8]

    await odoo.create({"name": "New"})
    assert odoo.ids() == [42]

    await odoo.unlink()
    assert odoo.ids() == []

    assert [call.operation for call in fake_server.model_calls()] == ["search", "write", "create", "unlink"]
    await http_client.aclose()


@pytest.mark.asyncio
async def test_read_and_search_read(fake_server, credentials):
    odoo, http_client = await connect(fake_server, credentials, model="res.partner")

    assert await odoo.browse([1, 2]).read(["name"]) == [
        {"id": 1, "name": "Record 1"},
        {"id": 2, "name": "Record 2"},
    ]
    assert await odoo.search_read([], ["name"]) == [{"id": 1, "name": "Azure Interior"}]
    assert odoo.ids() == [1, 2]
    await http_client.aclose()


@pytest.mark.asyncio
async def test_failed_unlink_keeps_ids(fake_server, credentials):
    fake_server.fail("unlink", "Record is referenced")
    odoo, http_client = await connect(fake_server, credentials, AdapterType.XMLRPC)

    odoo.browse([4, 5])
    with pytest.raises(ProtocolFault, match="Record is referenced"):
        await odoo.unlink()
    assert odoo.ids() == [4, 5]
    await http_client.aclose()


@pytest.mark.asyncio
async def test_get_without_records_sends_nothing(fake_server, credentials):
    odoo, http_client = await connect(fake_server, credentials)

    with pytest.raises(NoRecordError):
        await odoo.get("name")
    assert fake_server.model_calls() == []
    await http_client.aclose()


@pytest.mark.asyncio
async def test_connect_refused(fake_server, credentials):
    fake_server.respond("login", False)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_server.handler))

    with pytest.raises(AuthenticationError):
        await AsyncClient.connect(credentials, http_client=http_client)
    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_context_manager_and_clone(fake_server, credentials):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_server.handler))

    async with await AsyncClient.connect(credentials, http_client=http_client) as odoo:
        other = odoo.clone().browse(3)
        assert odoo.ids() == []
        assert await other.get("name") == "Record 3"
    await http_client.aclose()
