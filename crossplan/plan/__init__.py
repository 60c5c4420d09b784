"""Build plan assembly, variable naming and export."""

from crossplan.plan.assembler import BuildPlan, BuildPlanAssembler
from crossplan.plan.naming import ATTRIBUTES, env_name, project, target_variable

__all__ = [
    "ATTRIBUTES",
    "BuildPlan",
    "BuildPlanAssembler",
    "env_name",
    "project",
    "target_variable",
]
