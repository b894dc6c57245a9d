from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from cgroupmon.models.controller import Controller


class ResolutionStatus(Enum):
    RESOLVED = "RESOLVED"
    UNSUPPORTED = "UNSUPPORTED"
    UNRESOLVED = "UNRESOLVED"


class ControllerPath(BaseModel):
    """
    Class for storing where the accounting directory of a job
    was found for a given controller, if it was found at all.
    """

    model_config = ConfigDict(frozen=True)

    controller: Controller
    status: ResolutionStatus
    path: Optional[str]
    triedPaths: List[str]

    @property
    def available(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED
