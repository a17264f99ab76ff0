from finality_cache.services.metrics import Metrics


class MockMetrics(Metrics):
    """Records every observation for later assertions."""

    def __init__(self):
        self.latest_slots: list[int] = []
        self.get_blocks_elapsed: list[float] = []
        self.is_slot_confirmed_elapsed: list[float] = []

    def record_latest_slot(self, slot: int) -> None:
        self.latest_slots.append(slot)

    def record_get_blocks_elapsed(self, elapsed: float) -> None:
        self.get_blocks_elapsed.append(elapsed)

    def record_is_slot_confirmed_elapsed(self, elapsed: float) -> None:
        self.is_slot_confirmed_elapsed.append(elapsed)
