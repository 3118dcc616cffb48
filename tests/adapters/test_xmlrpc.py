"""
XML-RPC adapter contract tests
"""

import datetime
import xmlrpc.client

import httpx
import pytest

from odoo_rpc.adapters.xmlrpc.client import AsyncXmlRpcClient, XmlRpcClient, XmlRpcEncoder
from odoo_rpc.errors import EncodeError, MalformedResponse, ProtocolFault, RequestTimeout, TransportError
from odoo_rpc.operations import Operation
from odoo_rpc.utils.serialization import encode_xmlrpc_body


def xml_response(*values):
    content = xmlrpc.client.dumps(values, methodresponse=True, allow_none=True)
    return httpx.Response(200, content=content.encode("utf-8"), headers={"Content-Type": "text/xml"})


def make_adapter(handler):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return XmlRpcClient(base_url="http://odoo.test", http_client=http_client)


class TestXmlRpcEncoder:
    """Envelope layout"""

    def test_authenticate_carries_empty_environment(self):
        request = XmlRpcEncoder().encode_authenticate("testdb", "demo", "secret")
        assert request.endpoint == "/xmlrpc/2/common"
        assert request.method == "authenticate"
        assert list(request.args) == ["testdb", "demo", "secret", {}]

    def test_execute_kw_nests_operation_arguments(self):
        request = XmlRpcEncoder().encode_execute(
            "testdb", 2, "demo", "res.partner", Operation.WRITE, [1, 2], {"name": "x"}
        )
        assert request.endpoint == "/xmlrpc/2/object"
        assert request.method == "execute_kw"
        assert list(request.args) == ["testdb", 2, "demo", "res.partner", "write", [[1, 2], {"name": "x"}]]

    def test_same_prefix_as_jsonrpc(self):
        from odoo_rpc.adapters.jsonrpc.client import JsonRpcEncoder

        xml = XmlRpcEncoder().encode_execute("db", 1, "pw", "m", Operation.READ, [1], ["name"])
        json_ = JsonRpcEncoder().encode_execute("db", 1, "pw", "m", Operation.READ, [1], ["name"])
        assert list(xml.args[:5]) == list(json_.args[:5])
        assert xml.args[5] == list(json_.args[5:])

    def test_64_bit_ids_written_as_i8(self):
        request = XmlRpcEncoder().encode_execute("db", 2, "pw", "res.partner", Operation.READ, [2 ** 40], ["name"])
        body = encode_xmlrpc_body(request)
        assert b"<int>2</int>" in body
        assert b"<i8>1099511627776</i8>" in body
        params, method = xmlrpc.client.loads(body)
        assert method == "execute_kw"
        assert params[5] == [[2 ** 40], ["name"]]

    def test_dates_written_as_server_text(self):
        values = {"date": datetime.date(2024, 1, 31), "stamp": datetime.datetime(2024, 1, 31, 8, 5, 0)}
        request = XmlRpcEncoder().encode_execute("db", 2, "pw", "res.partner", Operation.CREATE, values)
        params, _ = xmlrpc.client.loads(encode_xmlrpc_body(request))
        assert params[5] == [{"date": "2024-01-31", "stamp": "2024-01-31 08:05:00"}]

    def test_unmarshallable_argument(self):
        request = XmlRpcEncoder().encode_execute("db", 2, "pw", "res.partner", Operation.CREATE, {"x": object()})
        with pytest.raises(EncodeError):
            encode_xmlrpc_body(request)


class TestXmlRpcClient:
    """Transport behaviour"""

    def test_posts_method_call(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["params"], seen["method"] = xmlrpc.client.loads(request.content)
            return xml_response(2)

        adapter = make_adapter(handler)
        assert adapter.call(adapter.encode_authenticate("testdb", "demo", "demo")) == 2
        assert seen["url"] == "http://odoo.test/xmlrpc/2/common"
        assert seen["method"] == "authenticate"
        assert seen["params"] == ("testdb", "demo", "demo", {})

    def test_object_endpoint(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            return xml_response([{"id": 1, "name": "Azure"}])

        adapter = make_adapter(handler)
        result = adapter.call(adapter.encode_execute("db", 2, "pw", "res.partner", Operation.READ, [1], ["name"]))
        assert seen["path"] == "/xmlrpc/2/object"
        assert result == [{"id": 1, "name": "Azure"}]

    def test_none_in_arguments_is_encoded(self):
        adapter = make_adapter(lambda request: xml_response(True))
        request = adapter.encode_execute("db", 2, "pw", "res.partner", Operation.WRITE, [1], {"comment": None})
        assert adapter.call(request) is True

    def test_fault_raises_protocol_fault(self):
        def handler(request):
            content = xmlrpc.client.dumps(xmlrpc.client.Fault(3, "Access Denied"), methodresponse=True)
            return httpx.Response(200, content=content.encode("utf-8"))

        adapter = make_adapter(handler)
        with pytest.raises(ProtocolFault) as err:
            adapter.call(adapter.encode_authenticate("db", "u", "p"))
        assert err.value.code == 3
        assert "Access Denied" in str(err.value)
        assert isinstance(err.value.__cause__, xmlrpc.client.Fault)

    def test_invalid_xml_is_malformed(self):
        adapter = make_adapter(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(MalformedResponse):
            adapter.call(adapter.encode_authenticate("db", "u", "p"))

    def test_http_error(self):
        adapter = make_adapter(lambda request: httpx.Response(404, text="not found"))
        with pytest.raises(TransportError) as err:
            adapter.call(adapter.encode_authenticate("db", "u", "p"))
        assert err.value.status_code == 404

    def test_encode_error_sends_nothing(self):
        seen = []

        def handler(request):
            seen.append(request)
            return xml_response(True)

        adapter = make_adapter(handler)
        with pytest.raises(EncodeError):
            adapter.call(adapter.encode_execute("db", 2, "pw", "res.partner", Operation.WRITE, [1], {"x": object()}))
        assert seen == []

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("connect timed out", request=request)

        adapter = make_adapter(handler)
        with pytest.raises(RequestTimeout):
            adapter.call(adapter.encode_authenticate("db", "u", "p"))


@pytest.mark.asyncio
async def test_async_client_call():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: xml_response(False)))
    adapter = AsyncXmlRpcClient(base_url="http://odoo.test", http_client=http_client)
    assert await adapter.call(adapter.encode_authenticate("db", "u", "p")) is False
    await http_client.aclose()
