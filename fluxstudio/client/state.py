"""Per-slot and batch state of the four-up generation screen."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

SLOT_COUNT = 4


class BatchStatus(str, Enum):
    idle = "idle"
    generating = "generating"
    settled = "settled"


@dataclass
class GeneratedImage:
    url: str
    prompt: str
    index: int
    width: int = 0
    height: int = 0


@dataclass
class Slot:
    index: int
    loading: bool = False
    result: Optional[GeneratedImage] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Settled without a result; the UI shows "Failed to generate / Try again"."""
        return not self.loading and self.result is None and self.error is not None

    def reset(self):
        self.loading = True
        self.result = None
        self.error = None


@dataclass
class StudioState:
    prompt: str = ""
    style: str = "artistic"
    size: str = "1024x1024"
    is_generating: bool = False
    has_generated: bool = False
    # Batch-level banner, only set when every slot failed
    error: Optional[str] = None
    slots: list[Slot] = field(default_factory=lambda: [Slot(i) for i in range(SLOT_COUNT)])
    copying: dict[int, bool] = field(default_factory=dict)

    @property
    def status(self) -> BatchStatus:
        if self.is_generating:
            return BatchStatus.generating
        if self.has_generated:
            return BatchStatus.settled
        return BatchStatus.idle

    @property
    def images(self) -> list[GeneratedImage]:
        return [slot.result for slot in self.slots if slot.result is not None]

    def image_for_slot(self, index: int) -> Optional[GeneratedImage]:
        return self.slots[index].result
