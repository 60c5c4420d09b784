"""
Plan command implementation.

Assembles the build plan for a target and prints it or writes it to a file.
"""

import logging

from filelock import Timeout as LockTimeout

from crossplan.cli.utils import (
    create_assembler,
    load_config,
    print_error,
    print_warning,
    resolve_dependency_names,
    resolve_store,
    resolve_target_id,
)
from crossplan.core.exceptions import CrossPlanError
from crossplan.core.filesystem import atomic_write
from crossplan.core.locking import output_lock
from crossplan.plan.export import render

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the plan command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
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

    if not dependencies:
        print_warning("No native dependencies requested; plan has toolchain variables only")

    content = render(plan, args.format)

    if args.output:
        output = args.output.resolve()
        try:
            with output_lock(output):
                atomic_write(output, content)
        except (OSError, LockTimeout) as e:
            logger.error(f"Failed to write build plan to {output}: {e}")
            print_error(f"Failed to write build plan to {output}", str(e))
            return 1
        logger.info(f"Wrote {plan.target.id} build plan to {output}")
    else:
        print(content, end="")

    return 0
