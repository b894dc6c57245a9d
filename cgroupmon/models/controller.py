from enum import Enum
from typing import Optional


class Controller(Enum):
    CPU = "cpu"
    MEMORY = "memory"
    BLKIO = "blkio"

    @staticmethod
    def factory(s: str) -> Optional["Controller"]:
        for controller in Controller:
            if controller.value == s.lower():
                return controller
        return None

    @property
    def label(self) -> str:
        return CONTROLLER_LABELS[self]


CONTROLLER_LABELS = {
    Controller.CPU: "CPU",
    Controller.MEMORY: "Memory",
    Controller.BLKIO: "I/O",
}
