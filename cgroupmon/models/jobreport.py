from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import List, Optional

from cgroupmon.models.controller import Controller
from cgroupmon.models.controllerpath import ControllerPath
from cgroupmon.models.resourceusage import CpuMetrics, MemoryMetrics, IoMetrics


class MonitorMode(Enum):
    STRICT = "STRICT"
    LENIENT = "LENIENT"

    @staticmethod
    def factory(s: str) -> "MonitorMode":
        for mode in MonitorMode:
            if mode.value == s.upper():
                return mode
        return MonitorMode.LENIENT


class JobReport(BaseModel):
    """
    Class for the snapshot of the resource usage of a running job,
    as seen by the controllers that could be found for it.
    """

    jobId: str
    mode: MonitorMode
    controllers: List[Controller]
    paths: List[ControllerPath]
    cpu: Optional[CpuMetrics] = None
    memory: Optional[MemoryMetrics] = None
    io: Optional[IoMetrics] = None
    timeInstant: datetime

    def path_for(self, controller: Controller) -> Optional[ControllerPath]:
        for p in self.paths:
            if p.controller == controller:
                return p
        return None
