import tempfile
import unittest
from pathlib import Path

from test_utils import reply, unix_server

from xenops_cli.lib.core.errors import DaemonError, DaemonUnreachable, PowerStateConflict
from xenops_cli.lib.rpc.transport import UnixSocketTransport


class UnixSocketTransportTests(unittest.TestCase):
    def test_request_framing_and_result(self) -> None:
        with unix_server(lambda req: reply(result=["Running"])) as (path, received):
            transport = UnixSocketTransport(path, connect_timeout=2.0)
            result = transport.call("VM.start", ["vm-1", False])

        self.assertEqual(result, ["Running"])
        self.assertEqual(received[0]["method"], "VM.start")
        self.assertEqual(received[0]["params"], ["vm-1", False])
        self.assertEqual(received[0]["id"], 1)

    def test_reply_terminated_by_eof_is_accepted(self) -> None:
        with unix_server(lambda req: b'{"result": "ok", "error": null, "id": 1}') as (path, _):
            result = UnixSocketTransport(path, connect_timeout=2.0).call("VM.list", [])
        self.assertEqual(result, "ok")

    def test_daemon_error_is_raised_typed(self) -> None:
        err_reply = reply(error=["Bad_power_state", "Running", "Halted"])
        with unix_server(lambda req: err_reply) as (path, _):
            transport = UnixSocketTransport(path, connect_timeout=2.0)
            with self.assertRaises(PowerStateConflict) as ctx:
                transport.call("VM.remove", ["vm-1"])
        self.assertEqual(ctx.exception.params, ["Running", "Halted"])

    def test_closed_without_reply_is_unreachable(self) -> None:
        with unix_server(lambda req: None) as (path, _):
            transport = UnixSocketTransport(path, connect_timeout=2.0)
            with self.assertRaises(DaemonUnreachable):
                transport.call("VM.list", [])

    def test_malformed_reply_is_unreachable(self) -> None:
        with unix_server(lambda req: b"<html>\n") as (path, _):
            transport = UnixSocketTransport(path, connect_timeout=2.0)
            with self.assertRaises(DaemonUnreachable):
                transport.call("VM.list", [])

    def test_reply_for_another_request_is_unreachable(self) -> None:
        with unix_server(lambda req: reply(result="ok", request_id=7)) as (path, _):
            transport = UnixSocketTransport(path, connect_timeout=2.0)
            with self.assertRaises(DaemonUnreachable) as ctx:
                transport.call("VM.list", [])
        self.assertIn("does not answer request 1", ctx.exception.message)

    def test_empty_error_member_is_still_an_error(self) -> None:
        for error in ([], ""):
            with self.subTest(error=error):
                with unix_server(lambda req: reply(result="ok", error=error)) as (path, _):
                    transport = UnixSocketTransport(path, connect_timeout=2.0)
                    with self.assertRaises(DaemonError):
                        transport.call("VM.list", [])

    def test_missing_socket_is_unreachable(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            transport = UnixSocketTransport(Path(td) / "nobody.sock", connect_timeout=0.5)
            with self.assertRaises(DaemonUnreachable) as ctx:
                transport.call("VM.list", [])
        self.assertIn("nobody.sock", ctx.exception.message)

    def test_trace_sees_request_and_reply(self) -> None:
        lines: list[str] = []
        with unix_server(lambda req: reply(result=[])) as (path, _):
            UnixSocketTransport(path, connect_timeout=2.0, trace=lines.append).call("VM.list", [])
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("-> "))
        self.assertIn('"VM.list"', lines[0])
        self.assertTrue(lines[1].startswith("<- "))
