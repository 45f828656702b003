"""
Destination component - final URL selection and the traffic-split policy.
"""

from ._impl import (
    DestinationSelection,
    DestinationSelector,
    SelectionReason,
    TrafficSplitConfig,
    is_exempt,
)
from .component import run, run_select
from .models import SelectDestinationInput, SelectDestinationOutput
from .ports import RandomPort

__all__ = [
    # Entry points
    "run",
    "run_select",
    # Models
    "SelectDestinationInput",
    "SelectDestinationOutput",
    # Ports
    "RandomPort",
    # _impl re-exports
    "DestinationSelection",
    "DestinationSelector",
    "SelectionReason",
    "TrafficSplitConfig",
    "is_exempt",
]
