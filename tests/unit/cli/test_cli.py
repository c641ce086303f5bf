"""CLI argument handling, exit codes, and session wiring tests."""

from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import ExitStack, redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from lazydisk import cli
from lazydisk.disk_model import Volume
from lazydisk.runtime.app import EXIT_NO_VOLUMES, EXIT_NOT_A_TERMINAL, EXIT_OK, EXIT_SCAN_FAILED


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self._stack = ExitStack()
        self._stack.enter_context(mock.patch("lazydisk.cli.configure_logging", return_value=self.tmp / "x.log"))
        self._stack.enter_context(mock.patch("lazydisk.runtime.config.CONFIG_PATH", self.tmp / "config.json"))

    def tearDown(self) -> None:
        self._stack.close()
        self._tmp.cleanup()

    def test_list_prints_volumes(self) -> None:
        volume = Volume(name="/dev/sda1", mount_path=Path("/"), total_space=2048, available_space=1024)
        stdout = io.StringIO()
        with mock.patch("lazydisk.cli.list_volumes", return_value=[volume]), redirect_stdout(stdout):
            code = cli.main(["--list"])
        self.assertEqual(code, EXIT_OK)
        self.assertIn("/dev/sda1", stdout.getvalue())

    def test_list_without_volumes_exits_with_no_volumes_code(self) -> None:
        stderr = io.StringIO()
        with mock.patch("lazydisk.cli.list_volumes", return_value=[]), redirect_stderr(stderr):
            code = cli.main(["--list"])
        self.assertEqual(code, EXIT_NO_VOLUMES)
        self.assertIn("No volumes found", stderr.getvalue())

    def test_non_directory_path_exits_with_scan_failure_code(self) -> None:
        target = self.tmp / "file.txt"
        target.write_text("x", encoding="utf-8")
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            code = cli.main([str(target)])
        self.assertEqual(code, EXIT_SCAN_FAILED)
        self.assertNotEqual(code, EXIT_NOT_A_TERMINAL)
        self.assertIn("Not a directory", stderr.getvalue())

    def test_missing_path_exits_with_scan_failure_code(self) -> None:
        with redirect_stderr(io.StringIO()):
            code = cli.main([str(self.tmp / "gone")])
        self.assertEqual(code, EXIT_SCAN_FAILED)

    def test_requires_interactive_terminal(self) -> None:
        stderr = io.StringIO()
        with mock.patch("lazydisk.cli.sys.stdin") as stdin, redirect_stderr(stderr):
            stdin.isatty.return_value = False
            code = cli.main([])
        self.assertEqual(code, EXIT_NOT_A_TERMINAL)

    def _run_interactive(self, argv: list[str], run_app_result: int) -> mock.Mock:
        terminal = mock.MagicMock()
        with mock.patch("lazydisk.cli.sys.stdin") as stdin, mock.patch("lazydisk.cli.sys.stdout") as stdout, mock.patch(
            "lazydisk.cli.TerminalController", return_value=terminal
        ), mock.patch("lazydisk.cli.run_app", return_value=run_app_result) as run_app, redirect_stderr(io.StringIO()):
            stdin.isatty.return_value = True
            stdout.isatty.return_value = True
            code = cli.main(argv)
        self.assertEqual(code, run_app_result)
        terminal.raw_mode.assert_called_once()
        return run_app

    def test_path_argument_becomes_scan_target(self) -> None:
        run_app = self._run_interactive([str(self.tmp)], EXIT_OK)
        scan_target = run_app.call_args.kwargs["scan_target"]
        self.assertEqual(scan_target.mount_path, self.tmp.resolve())

    def test_volume_picker_used_without_path(self) -> None:
        run_app = self._run_interactive([], EXIT_OK)
        self.assertIsNone(run_app.call_args.kwargs["scan_target"])

    def test_scan_failure_code_is_returned(self) -> None:
        self._run_interactive([str(self.tmp)], EXIT_SCAN_FAILED)

    def test_theme_argument_is_persisted(self) -> None:
        self._run_interactive(["--theme", "ocean"], EXIT_OK)
        from lazydisk.runtime import config

        self.assertEqual(config.load_theme_name(), "ocean")

    def test_help_documents_exit_codes(self) -> None:
        parser = cli.build_parser()
        self.assertEqual(parser.epilog, cli.EXIT_CODES_HELP)
        self.assertIn("no volumes found", parser.format_help())
        self.assertIn(f"{EXIT_NOT_A_TERMINAL} not a terminal", cli.EXIT_CODES_HELP)
        self.assertIn(f"{EXIT_SCAN_FAILED} scan root missing or unreadable", cli.EXIT_CODES_HELP)

    def test_all_flag_help_matches_deduplicated_listing(self) -> None:
        action = next(a for a in cli.build_parser()._actions if a.dest == "all")
        self.assertNotIn("duplicate", action.help)


if __name__ == "__main__":
    unittest.main()
