import unittest

from xenops_cli.lib.core.errors import (
    EXIT_FAILURE,
    EXIT_UNREACHABLE,
    EXIT_USAGE,
    DaemonError,
    DaemonUnreachable,
    InvalidMetadata,
    MissingArgument,
    NotFound,
    PowerStateConflict,
    ResourceConstraint,
    error_from_wire,
)


class ErrorFromWireTests(unittest.TestCase):
    def test_known_codes_map_to_kinds(self) -> None:
        cases = {
            "Does_not_exist": NotFound,
            "Bad_power_state": PowerStateConflict,
            "Not_enough_memory": ResourceConstraint,
            "No_bootable_device": ResourceConstraint,
            "Failed_to_parse_metadata": InvalidMetadata,
        }
        for code, cls in cases.items():
            with self.subTest(code=code):
                self.assertIs(type(error_from_wire([code, "x"])), cls)

    def test_daemon_text_is_kept_verbatim(self) -> None:
        err = error_from_wire(["Bad_power_state", "Running", "Halted"])
        self.assertEqual(err.code, "Bad_power_state")
        self.assertEqual(err.params, ["Running", "Halted"])
        self.assertEqual(err.message, "Bad_power_state: Running, Halted")
        self.assertEqual(err.kind, "PowerStateConflict")

    def test_bare_string_code(self) -> None:
        err = error_from_wire("Does_not_exist")
        self.assertIsInstance(err, NotFound)
        self.assertEqual(err.message, "Does_not_exist")

    def test_unknown_code_is_generic_daemon_error(self) -> None:
        err = error_from_wire(["Cancelled", "task-3"])
        self.assertIs(type(err), DaemonError)
        self.assertEqual(err.exit_code, EXIT_FAILURE)

    def test_unrecognised_shape_is_internal_error(self) -> None:
        err = error_from_wire({"weird": True})
        self.assertEqual(err.code, "Internal_error")


class ExitCodeTests(unittest.TestCase):
    def test_exit_codes_by_kind(self) -> None:
        self.assertEqual(MissingArgument("m").exit_code, EXIT_USAGE)
        self.assertEqual(DaemonUnreachable("d").exit_code, EXIT_UNREACHABLE)
        self.assertEqual(NotFound("Does_not_exist").exit_code, EXIT_FAILURE)
        self.assertEqual(PowerStateConflict("Bad_power_state").exit_code, EXIT_FAILURE)
