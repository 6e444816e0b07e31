"""
Hover selection: keeps at most one region selected, the one under the pointer.

Pointer events are queued by the UI and drained once per frame, so the
"clear previous selection, then rescan" order is kept per event.
"""
import logging

logger = logging.getLogger(__name__)


class HoverController:
    """
    Two-state machine over AppState.selected: nothing selected, or one region.

    `locate` maps screen (x, y) to geographic (lon, lat), or None when the
    pointer is not over the map.
    """

    def __init__(self, state, locate):
        self.state = state
        self.locate = locate

    def post_event(self, event):
        """Queue an input event dict, e.g. {"event_type": "pointer_move", "x": 10, "y": 20}."""
        self.state.pending_events.append(event)

    def process_events(self):
        """Drain queued events in arrival order. Returns the number handled."""
        handled = 0
        while self.state.pending_events:
            event = self.state.pending_events.popleft()
            if event["event_type"] == "pointer_move":
                self.handle_pointer_move(event["x"], event["y"])
            handled += 1
        return handled

    def clear_selection(self):
        if self.state.selected is not None:
            self.state.selected.is_selected = False
            self.state.selected = None

    def handle_pointer_move(self, x, y):
        """Deselect, then select the first region containing the pointer (if any)."""
        self.clear_selection()

        location = self.locate(x, y)
        if location is None:
            return None
        lon, lat = location

        for region in self.state.regions:
            if region.contains(lon, lat):
                region.is_selected = True
                self.state.selected = region
                logger.debug("Hovered %s (%s)", region.name, region.id)
                return region
        return None
