"""
Tests for the command line entry point.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from presence_dimmer import cli
from presence_dimmer.errors import BoundaryFatalError


class TestCli(unittest.TestCase):
    """Test exit codes for validate and run modes."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "presence.yaml"
        self.config_path.write_text("detection:\n  conf_thresh: 0.2\n", encoding="utf-8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_parse_args(self):
        """Test flags are parsed."""
        args = cli.parse_args(["-c", "x.yaml", "--quiet", "--validate"])

        self.assertEqual(args.config, "x.yaml")
        self.assertTrue(args.quiet)
        self.assertTrue(args.validate)

    def test_validate_ok(self):
        """Test a valid config exits 0."""
        self.assertEqual(cli.run_validate(str(self.config_path)), 0)

    def test_validate_invalid(self):
        """Test an invalid config exits 1."""
        self.config_path.write_text("detection:\n  conf_thresh: 3\n", encoding="utf-8")

        self.assertEqual(cli.run_validate(str(self.config_path)), 1)

    def test_validate_missing_file(self):
        """Test a missing explicit config exits 1."""
        missing = os.path.join(self.temp_dir.name, "missing.yaml")

        self.assertEqual(cli.run_validate(missing), 1)

    @patch("presence_dimmer.cli.build_loop")
    def test_startup_failure_exits_nonzero(self, mock_build):
        """Test a model/camera failure at startup exits 1."""
        mock_build.side_effect = BoundaryFatalError("Cannot connect to camera: 0")

        self.assertEqual(cli.run(str(self.config_path)), 1)

    @patch("presence_dimmer.cli._setup_signal_handlers")
    @patch("presence_dimmer.cli.build_loop")
    def test_fatal_error_during_loop_exits_nonzero(self, mock_build, _signals):
        """Test a fatal boundary error while running exits 1."""
        loop = MagicMock()
        loop.run.side_effect = BoundaryFatalError("Failed to read from camera")
        mock_build.return_value = loop

        self.assertEqual(cli.run(str(self.config_path)), 1)

    @patch("presence_dimmer.cli._setup_signal_handlers")
    @patch("presence_dimmer.cli.build_loop")
    def test_end_of_stream_exits_zero(self, mock_build, _signals):
        """Test a clean end of stream exits 0."""
        loop = MagicMock()
        loop.run.return_value = "end_of_stream"
        mock_build.return_value = loop

        self.assertEqual(cli.run(str(self.config_path)), 0)
        loop.run.assert_called_once_with(cli._shutdown_signal)

    @patch("presence_dimmer.cli.setup_logging")
    def test_main_validate_exit_code(self, _logging):
        """Test main exits with the validate result."""
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--validate", "-c", str(self.config_path)])

        self.assertEqual(ctx.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
