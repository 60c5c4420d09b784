"""
crossplan CLI argument parser.

This module implements the command-line interface for crossplan using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from crossplan.plan.export import FORMATTERS

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("crossplan")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """crossplan command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="crossplan",
            description="crossplan - cross-compilation build plan resolver",
            epilog='Use "crossplan COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"crossplan {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./crossplan.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_targets_command(subparsers)
        self._add_deps_command(subparsers)
        self._add_plan_command(subparsers)
        self._add_build_command(subparsers)
        self._add_shell_env_command(subparsers)

        return parser

    def _add_plan_arguments(self, parser: argparse.ArgumentParser):
        """Arguments shared by commands that assemble a build plan."""
        parser.add_argument(
            "--target",
            "-t",
            metavar="ID",
            help="Target identifier or triple (default: from config)",
        )
        parser.add_argument(
            "--dep",
            "-d",
            action="append",
            dest="deps",
            metavar="NAME",
            help="Native dependency the project links (can be used multiple times)",
        )
        parser.add_argument(
            "--store",
            metavar="PATH",
            help="Package store root (default: from config)",
        )
        parser.add_argument(
            "--revision",
            metavar="REV",
            help="Pinned toolchain revision (default: from config, else latest)",
        )
        parser.add_argument(
            "--with-host",
            action="store_true",
            help="Also emit static dependency variables for the host target",
        )

    def _add_targets_command(self, subparsers):
        """Add 'targets' subcommand."""
        parser = subparsers.add_parser(
            "targets",
            help="List supported targets",
            description="List the targets in the catalog",
        )
        parser.add_argument("--json", action="store_true", help="Output JSON")

    def _add_deps_command(self, subparsers):
        """Add 'deps' subcommand."""
        parser = subparsers.add_parser(
            "deps",
            help="List known native dependencies",
            description="List the native dependencies in the registry",
        )
        parser.add_argument("--json", action="store_true", help="Output JSON")

    def _add_plan_command(self, subparsers):
        """Add 'plan' subcommand."""
        parser = subparsers.add_parser(
            "plan",
            help="Print the build environment for a target",
            description="Assemble the build plan for a target and print or save it",
        )
        self._add_plan_arguments(parser)
        parser.add_argument(
            "--format",
            "-f",
            choices=sorted(FORMATTERS),
            default="shell",
            help="Output format [default: shell]",
        )
        parser.add_argument(
            "--output",
            "-o",
            type=Path,
            metavar="PATH",
            help="Write the plan to PATH instead of stdout",
        )

    def _add_build_command(self, subparsers):
        """Add 'build' subcommand."""
        parser = subparsers.add_parser(
            "build",
            help="Run the project build for a target",
            description=(
                "Assemble the build plan for a target and run the build command "
                "with it. The build command's exit code is returned unchanged."
            ),
        )
        self._add_plan_arguments(parser)
        parser.add_argument(
            "build_command",
            nargs=argparse.REMAINDER,
            metavar="-- COMMAND",
            help="Build command (default: from config, else 'cargo build --release')",
        )

    def _add_shell_env_command(self, subparsers):
        """Add 'shell-env' subcommand."""
        parser = subparsers.add_parser(
            "shell-env",
            help="Print the host development shell environment",
            description="Print packages and environment for local development",
        )
        parser.add_argument(
            "--dep",
            "-d",
            action="append",
            dest="deps",
            metavar="NAME",
            help="Native dependency (can be used multiple times)",
        )
        parser.add_argument(
            "--store",
            metavar="PATH",
            help="Package store root (default: from config)",
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            argv: Command-line arguments (default: sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        args = self.parser.parse_args(argv)

        self._configure_logging(args)

        if not args.command:
            self.parser.print_help()
            return 0

        try:
            return self._dispatch_command(args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except Exception as e:
            logger.error(f"Error: {e}")
            if args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "targets": "crossplan.cli.commands.targets",
            "deps": "crossplan.cli.commands.deps",
            "plan": "crossplan.cli.commands.plan",
            "build": "crossplan.cli.commands.build",
            "shell-env": "crossplan.cli.commands.shell_env",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
