from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional

from core.regions import Region, RegionIndex


@dataclass
class AppState:
    """
    Holds the runtime state of the application.
    Independent of UI or Rendering backend.
    """
    # Loaded once at startup
    values: Dict[str, float] = field(default_factory=dict)
    regions: RegionIndex = field(default_factory=lambda: RegionIndex([]))

    # Interaction State
    selected: Optional[Region] = None
    pending_events: Deque[dict] = field(default_factory=deque)

    @classmethod
    def from_map_data(cls, map_data):
        return cls(values=map_data["values"], regions=map_data["regions"])

    @property
    def selected_value(self) -> Optional[float]:
        if self.selected is None:
            return None
        return self.values.get(self.selected.id)
