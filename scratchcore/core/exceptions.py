class ScratchCoreError(Exception):
    """Base class for errors a caller is expected to catch."""


class NoPrizeConfiguration(ScratchCoreError):
    def __init__(self, layout_id: str = None):
        self.layout_id = layout_id
        where = f" for layout '{layout_id}'" if layout_id else ""
        super().__init__(
            f"No prize configurations provided{where}. "
            "Each ticket layout must have explicit prize associations."
        )


class NoValidPrizes(ScratchCoreError):
    def __init__(self, skipped: int = 0):
        self.skipped = skipped
        super().__init__(
            f"No valid prizes available for selection ({skipped} skipped). "
            "Check that prize IDs exist and weights are positive."
        )


class UnknownLayoutError(ScratchCoreError):
    def __init__(self, layout_id: str):
        self.layout_id = layout_id
        super().__init__(f"Ticket layout '{layout_id}' not found")
