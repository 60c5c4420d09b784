"""
Targets command implementation.

Lists the targets in the catalog, with the project's overrides applied.
"""

import json
import logging

from crossplan.cli.utils import create_catalogs, load_config, print_error
from crossplan.core.exceptions import CrossPlanError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the targets command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = load_config(args)
        catalog, _ = create_catalogs(config)
    except CrossPlanError as e:
        logger.error(f"Failed to load targets: {e}")
        print_error("Failed to load targets", str(e))
        return 1

    targets = catalog.list_targets()

    if args.json:
        data = [
            {
                "id": t.id,
                "triple": t.triple,
                "cross_package_key": t.cross_package_key,
                "link_mode": t.default_link_mode.value,
                "description": t.description,
            }
            for t in targets
        ]
        print(json.dumps(data, indent=2))
        return 0

    width = max(len(t.id) for t in targets)
    for t in targets:
        print(
            f"{t.id:<{width}}  {t.triple:<32}  {t.default_link_mode.value:<8}  {t.description}"
        )
    return 0
