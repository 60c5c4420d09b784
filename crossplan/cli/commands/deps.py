"""
Deps command implementation.

Lists the native dependencies in the registry.
"""

import json
import logging

from crossplan.cli.utils import create_catalogs, load_config, print_error
from crossplan.core.exceptions import CrossPlanError

logger = logging.getLogger(__name__)


def run(args) -> int:
    try:
        config = load_config(args)
        _, registry = create_catalogs(config)
    except CrossPlanError as e:
        logger.error(f"Failed to load dependencies: {e}")
        print_error("Failed to load dependencies", str(e))
        return 1

    dependencies = registry.list_dependencies()

    if args.json:
        data = [
            {
                "name": d.name,
                "package": d.package,
                "supports_static": d.supports_static,
                "include_subpath": d.include_subpath,
                "lib_subpath": d.lib_subpath,
                "description": d.description,
            }
            for d in dependencies
        ]
        print(json.dumps(data, indent=2))
        return 0

    for d in dependencies:
        mode = "static" if d.supports_static else "shared"
        print(f"{d.name:<10}  {mode:<6}  {d.description}")
    return 0
