"""
Shell-env command implementation.

Prints the host development shell: its packages and environment exports.
"""

import logging
import shlex

from crossplan.cli.utils import (
    create_catalogs,
    load_config,
    print_error,
    resolve_dependency_names,
    resolve_store,
)
from crossplan.core.exceptions import CrossPlanError
from crossplan.devshell import DevShellEnvironment

logger = logging.getLogger(__name__)


def run(args) -> int:
    try:
        config = load_config(args)
        store = resolve_store(args, config)
        _, registry = create_catalogs(config)
        name = config.project or args.project_root.resolve().name
        shell = DevShellEnvironment(registry, store).build(
            name, resolve_dependency_names(args, config)
        )
    except CrossPlanError as e:
        logger.error(f"Failed to build shell environment: {e}")
        print_error("Failed to build shell environment", str(e))
        return 1

    print(f"# {shell.motd}")
    print(f"# packages: {' '.join(shell.packages)}")
    for key in sorted(shell.env):
        print(f"export {key}={shlex.quote(shell.env[key])}")
    return 0
