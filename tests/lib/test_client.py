import unittest

from test_utils import VM_A, VM_B, make_client, vm_row

from xenops_cli.lib.core.errors import AmbiguousReference, DaemonUnreachable, NotFound
from xenops_cli.lib.core.model import (
    ById,
    ByName,
    PowerAction,
    PowerState,
    TransitionRequest,
    VmSummary,
)


class EnumerateTests(unittest.TestCase):
    def test_rows_are_decoded_in_daemon_order(self) -> None:
        client, transport = make_client(
            {"VM.list": [vm_row(VM_B, "b", "Halted"), vm_row(VM_A, "a", "Running")]}
        )
        self.assertEqual(
            client.enumerate(),
            [
                VmSummary(VM_B, "b", PowerState.HALTED),
                VmSummary(VM_A, "a", PowerState.RUNNING),
            ],
        )
        self.assertEqual(transport.calls, [("VM.list", [])])

    def test_malformed_row_is_a_channel_failure(self) -> None:
        client, _ = make_client({"VM.list": [{"name": "no-id"}]})
        with self.assertRaises(DaemonUnreachable):
            client.enumerate()

    def test_non_list_reply_is_a_channel_failure(self) -> None:
        client, _ = make_client({"VM.list": {"vms": []}})
        with self.assertRaises(DaemonUnreachable):
            client.enumerate()


class ResolveTests(unittest.TestCase):
    def test_uuid_passes_through_without_rpc(self) -> None:
        client, transport = make_client()
        self.assertEqual(client.resolve(ById(VM_A)), VM_A)
        self.assertEqual(transport.calls, [])

    def test_unique_name_resolves(self) -> None:
        client, _ = make_client(
            {"VM.list": [vm_row(VM_A, "web", "Running"), vm_row(VM_B, "db", "Halted")]}
        )
        self.assertEqual(client.resolve(ByName("db")), VM_B)

    def test_no_match_is_not_found(self) -> None:
        client, _ = make_client({"VM.list": [vm_row(VM_A, "web", "Running")]})
        with self.assertRaises(NotFound) as ctx:
            client.resolve(ByName("Web"))
        self.assertEqual(ctx.exception.params, ["VM", "Web"])

    def test_several_matches_is_ambiguous(self) -> None:
        client, _ = make_client(
            {"VM.list": [vm_row(VM_A, "web", "Running"), vm_row(VM_B, "web", "Halted")]}
        )
        with self.assertRaises(AmbiguousReference) as ctx:
            client.resolve(ByName("web"))
        self.assertIn(VM_A, ctx.exception.message)
        self.assertIn(VM_B, ctx.exception.message)


class CallShapeTests(unittest.TestCase):
    def test_register_sends_metadata_and_returns_id(self) -> None:
        client, transport = make_client({"VM.add": VM_A})
        self.assertEqual(client.register({"name": "web"}), VM_A)
        self.assertEqual(transport.calls, [("VM.add", [{"name": "web"}])])

    def test_register_without_an_id_is_malformed(self) -> None:
        for result in (None, "", 42):
            with self.subTest(result=result):
                client, _ = make_client({"VM.add": result})
                with self.assertRaises(DaemonUnreachable):
                    client.register({"name": "web"})

    def test_unregister(self) -> None:
        client, transport = make_client()
        client.unregister(VM_A)
        self.assertEqual(transport.calls, [("VM.remove", [VM_A])])

    def test_transition_params_per_action(self) -> None:
        cases = [
            (TransitionRequest(ById(VM_A), PowerAction.START, paused=True), ("VM.start", [VM_A, True])),
            (TransitionRequest(ById(VM_A), PowerAction.SHUTDOWN, timeout=30.0), ("VM.shutdown", [VM_A, 30.0])),
            (TransitionRequest(ById(VM_A), PowerAction.REBOOT), ("VM.reboot", [VM_A, None])),
            (
                TransitionRequest(ById(VM_A), PowerAction.SUSPEND, block_device="/dev/sdb"),
                ("VM.suspend", [VM_A, "/dev/sdb"]),
            ),
        ]
        for request, expected in cases:
            with self.subTest(action=request.action):
                client, transport = make_client()
                client.request_power_transition(VM_A, request)
                self.assertEqual(transport.calls, [expected])

    def test_transition_reports_resulting_state_when_given(self) -> None:
        client, _ = make_client({"VM.start": "Paused"})
        request = TransitionRequest(ById(VM_A), PowerAction.START, paused=True)
        self.assertIs(client.request_power_transition(VM_A, request), PowerState.PAUSED)

    def test_plain_acknowledgement_has_no_state(self) -> None:
        client, _ = make_client({"VM.shutdown": None})
        request = TransitionRequest(ById(VM_A), PowerAction.SHUTDOWN)
        self.assertIsNone(client.request_power_transition(VM_A, request))
