"""Split a plugin's recorded calls by hook kind."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .snapshot_schema import PluginCall

logger = logging.getLogger(__name__)

RESOLVE = "resolve"
LOAD = "load"
TRANSFORM = "transform"


@dataclass
class PluginCallPartition:
    """Calls of one plugin grouped by kind, each group in recorded order."""

    resolve_id_metrics: list["PluginCall"] = field(default_factory=list)
    load_metrics: list["PluginCall"] = field(default_factory=list)
    transform_metrics: list["PluginCall"] = field(default_factory=list)
    dropped: int = 0  # calls of an unrecognized kind

    def __len__(self) -> int:
        return len(self.resolve_id_metrics) + len(self.load_metrics) + len(self.transform_metrics)


def split_calls(calls: list["PluginCall"]) -> PluginCallPartition:
    """
    Partition calls into resolve, load and transform groups.

    Calls whose type is none of the three are dropped.
    """
    partition = PluginCallPartition()
    groups = {
        RESOLVE: partition.resolve_id_metrics,
        LOAD: partition.load_metrics,
        TRANSFORM: partition.transform_metrics,
    }

    for call in calls:
        group = groups.get(call.type)
        if group is None:
            partition.dropped += 1
        else:
            group.append(call)

    if partition.dropped:
        logger.debug(f"Dropped {partition.dropped} plugin calls of unrecognized kind")

    return partition
