"""
Build command implementation.

Runs the project's build command with the target's build plan merged over the
current process environment. The build itself is opaque: its exit code is
returned unchanged.
"""

import logging
import os
import subprocess

from crossplan.cli.utils import (
    create_assembler,
    load_config,
    print_error,
    resolve_dependency_names,
    resolve_store,
    resolve_target_id,
)
from crossplan.core.exceptions import CrossPlanError

logger = logging.getLogger(__name__)


def _build_command(args, config) -> list:
    command = list(args.build_command or [])
    if command and command[0] == "--":
        command = command[1:]
    return command or list(config.build.command)


def run(args) -> int:
    """
    Run the build command.

    Returns:
        Exit code of the build command, or 1 if no plan could be assembled
    """
    try:
        config = load_config(args)
        store = resolve_store(args, config)
        target_id = resolve_target_id(args, config)
        dependencies = resolve_dependency_names(args, config)
        assembler = create_assembler(
            config, store, revision=args.revision, with_host=args.with_host
        )
        plan = assembler.assemble(target_id, dependencies, extra_env=config.env)
    except CrossPlanError as e:
        logger.error(f"Failed to assemble build plan: {e}")
        print_error("Failed to assemble build plan", str(e))
        return 1

    command = _build_command(args, config)
    env = dict(os.environ)
    env.update(plan.variables)

    logger.info(f"Building for {plan.target.id} ({plan.target.triple})")
    logger.debug(f"Build command: {' '.join(command)}")

    try:
        result = subprocess.run(command, cwd=args.project_root, env=env)
    except FileNotFoundError:
        logger.error(f"Build command not found: {command[0]}")
        print_error("Build command not found", command[0])
        return 127

    if result.returncode != 0:
        logger.error(f"Build failed with exit code {result.returncode}")
    return result.returncode
