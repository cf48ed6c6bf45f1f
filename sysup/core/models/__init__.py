"""
Domain models — Pydantic types for sysup.

All models are re-exported here for convenient access:

    from sysup.core.models import CommandSpec, UpdatePlan, PlainStep
"""

from sysup.core.models.command import CommandSpec, ExecutionResult, ParsedPackageList
from sysup.core.models.plan import (
    BestEffortStep,
    CargoStep,
    ChainedStep,
    PlainStep,
    Step,
    UpdatePlan,
)

__all__ = [
    # plan.py
    "BestEffortStep",
    "CargoStep",
    "ChainedStep",
    # command.py
    "CommandSpec",
    "ExecutionResult",
    "ParsedPackageList",
    "PlainStep",
    "Step",
    "UpdatePlan",
]
