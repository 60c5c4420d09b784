"""
Tests for the build command.
"""

from unittest.mock import Mock, patch

from crossplan.cli.parser import CLI


def run_cli(tmp_path, *argv):
    return CLI().run(["--project-root", str(tmp_path), *argv])


class TestBuildCommand:
    @patch("crossplan.cli.commands.build.subprocess.run")
    def test_default_command_with_plan_env(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0)

        assert run_cli(tmp_path, "build", "-t", "aarch64", "-d", "openssl") == 0

        command = mock_run.call_args[0][0]
        env = mock_run.call_args[1]["env"]
        assert command == ["cargo", "build", "--release"]
        assert env["AARCH64_UNKNOWN_LINUX_MUSL_OPENSSL_STATIC"] == "1"
        assert env["CARGO_BUILD_TARGET"] == "aarch64-unknown-linux-musl"
        assert "PATH" in env

    @patch("crossplan.cli.commands.build.subprocess.run")
    def test_exit_code_passed_through(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=101)

        assert run_cli(tmp_path, "build", "-t", "armv7") == 101

    @patch("crossplan.cli.commands.build.subprocess.run")
    def test_explicit_command(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0)

        run_cli(tmp_path, "build", "-t", "armv7", "--", "cargo", "build", "--bin", "bot")

        assert mock_run.call_args[0][0] == ["cargo", "build", "--bin", "bot"]

    @patch("crossplan.cli.commands.build.subprocess.run")
    def test_command_from_config(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0)
        (tmp_path / "crossplan.yaml").write_text(
            "version: 1\ntarget: armv7-gnu\nbuild:\n  command: [make, cross]\n"
        )

        assert run_cli(tmp_path, "build") == 0
        assert mock_run.call_args[0][0] == ["make", "cross"]

    @patch("crossplan.cli.commands.build.subprocess.run")
    def test_plan_failure_skips_build(self, mock_run, tmp_path, capsys):
        assert run_cli(tmp_path, "build", "-t", "riscv64-bogus") == 1

        mock_run.assert_not_called()
        assert "ERROR" in capsys.readouterr().err

    @patch("crossplan.cli.commands.build.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_build_tool(self, mock_run, tmp_path, capsys):
        assert run_cli(tmp_path, "build", "-t", "armv7", "--", "no-such-tool") == 127
        assert "no-such-tool" in capsys.readouterr().err
