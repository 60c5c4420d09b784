"""
Build plan serialization.

Renders plan variables for consumption by an external build invocation:
a sourceable shell script, a dotenv file, or JSON.
"""

import json
import shlex
from typing import Callable, Dict, Mapping

from crossplan.plan.assembler import BuildPlan


def _sorted_items(variables: Mapping[str, str]):
    return sorted(variables.items())


def to_shell(plan: BuildPlan) -> str:
    """
    Render as POSIX shell exports.

    Example:
        >>> print(to_shell(plan))  # doctest: +SKIP
        export CARGO_BUILD_TARGET=aarch64-unknown-linux-musl
    """
    lines = [f"# crossplan: {plan.target.id} ({plan.target.triple})"]
    for key, value in _sorted_items(plan.variables):
        lines.append(f"export {key}={shlex.quote(value)}")
    return "\n".join(lines) + "\n"


def to_dotenv(plan: BuildPlan) -> str:
    """Render as KEY=value lines."""
    return "".join(f"{key}={value}\n" for key, value in _sorted_items(plan.variables))


def to_json(plan: BuildPlan) -> str:
    """Render as JSON with target metadata and variables."""
    data = {
        "target": plan.target.id,
        "triple": plan.target.triple,
        "link_mode": plan.target.default_link_mode.value,
        "toolchain": {
            "compiler": plan.toolchain.compiler_path,
            "linker": plan.toolchain.linker_path,
            "stdlib": str(plan.toolchain.stdlib_artifact),
            "components": list(plan.toolchain.components),
        },
        "dependencies": [d.name for d in plan.dependencies],
        "variables": dict(_sorted_items(plan.variables)),
    }
    return json.dumps(data, indent=2) + "\n"


FORMATTERS: Dict[str, Callable[[BuildPlan], str]] = {
    "shell": to_shell,
    "dotenv": to_dotenv,
    "json": to_json,
}


def render(plan: BuildPlan, fmt: str = "shell") -> str:
    """
    Render a plan in the named format.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        formatter = FORMATTERS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown output format: {fmt} (expected one of {', '.join(FORMATTERS)})"
        ) from None
    return formatter(plan)
