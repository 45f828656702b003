# linkgate: Services
# Orchestrate components with injected ports

from linkgate.core.services.resolution import (
    OutcomeKind,
    ResolutionEngine,
    ResolutionOutcome,
)

__all__ = [
    "OutcomeKind",
    "ResolutionEngine",
    "ResolutionOutcome",
]
