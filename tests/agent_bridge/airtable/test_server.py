import asyncio
import json

from mcp import types
from mcp.shared.memory import create_connected_server_and_client_session

from agent_bridge.airtable import AirtableService
from agent_bridge.airtable.server import AirtableMCPServer


def test_list_tools_advertises_registry(service):
    server = AirtableMCPServer(service, name="test-server")
    tools = asyncio.run(server.list_tools())

    assert all(isinstance(t, types.Tool) for t in tools)
    assert "search_records" in {t.name for t in tools}
    assert server.server.name == "test-server"


def test_call_tool_wraps_result_as_text(service):
    server = AirtableMCPServer(service)
    content = asyncio.run(server.call_tool("get_record", {"base_id": "app1", "table_id": "tbl1", "record_id": "rec9"}))

    assert len(content) == 1
    assert content[0].type == "text"
    assert json.loads(content[0].text)["id"] == "rec9"


def test_session_round_trip_over_memory_streams(service):
    server = AirtableMCPServer(service)

    async def scenario():
        async with create_connected_server_and_client_session(server.server) as client:
            listed = await client.list_tools()
            result = await client.call_tool("list_bases", {})
            return listed, result

    listed, result = asyncio.run(scenario())

    assert "list_bases" in {t.name for t in listed.tools}
    assert not result.isError
    assert json.loads(result.content[0].text)[0]["name"] == "Projects"


def test_session_reports_service_errors_to_host():
    server = AirtableMCPServer(AirtableService(None))

    async def scenario():
        async with create_connected_server_and_client_session(server.server) as client:
            return await client.call_tool("list_bases", {})

    result = asyncio.run(scenario())

    assert result.isError
    assert "AIRTABLE_API_KEY" in result.content[0].text


def test_connect_with_traffic_logging_serves_initialize_and_list_tools(service, caplog):
    import logging

    import anyio
    from mcp.shared.message import SessionMessage

    caplog.set_level(logging.DEBUG, logger="agent_bridge.airtable.traffic")
    server = AirtableMCPServer(service)

    def request(req_id, method, params=None):
        return SessionMessage(
            types.JSONRPCMessage(types.JSONRPCRequest(jsonrpc="2.0", id=req_id, method=method, params=params))
        )

    async def scenario():
        host_send, read_recv = anyio.create_memory_object_stream(10)
        write_send, host_recv = anyio.create_memory_object_stream(10)

        with anyio.fail_after(10):
            async with anyio.create_task_group() as tg:
                tg.start_soon(lambda: server.connect(read_recv, write_send, log_traffic=True))

                await host_send.send(
                    request(
                        1,
                        "initialize",
                        {
                            "protocolVersion": types.LATEST_PROTOCOL_VERSION,
                            "capabilities": {},
                            "clientInfo": {"name": "test-host", "version": "0"},
                        },
                    )
                )
                init_reply = (await host_recv.receive()).message.root

                await host_send.send(
                    SessionMessage(
                        types.JSONRPCMessage(
                            types.JSONRPCNotification(jsonrpc="2.0", method="notifications/initialized")
                        )
                    )
                )
                await host_send.send(request(2, "tools/list"))
                tools_reply = (await host_recv.receive()).message.root

                await host_send.aclose()
        return init_reply, tools_reply

    init_reply, tools_reply = asyncio.run(scenario())

    assert init_reply.id == 1
    assert "tools" in init_reply.result["capabilities"]
    assert tools_reply.id == 2
    assert "list_records" in {t["name"] for t in tools_reply.result["tools"]}
    assert "From host:" in caplog.text
    assert "To host:" in caplog.text
