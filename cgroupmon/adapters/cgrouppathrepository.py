from abc import ABC, abstractmethod
import logging
import posixpath
from typing import Dict, List, Type

from cgroupmon.internal.errors import (
    ControllerUnsupportedError,
    JobPathUnresolvedError,
    PreconditionError,
)
from cgroupmon.internal.fs import AbstractFileSystem
from cgroupmon.models.controller import Controller
from cgroupmon.models.controllerpath import ControllerPath, ResolutionStatus

logger = logging.getLogger(__name__)


class AbstractCgroupPathRepository(ABC):
    """ """

    # file listing the member tasks of every v1 cgroup
    TASKS_FILE = "tasks"

    def __init__(
        self,
        root: str,
        uid: int,
        fs: AbstractFileSystem,
        schedulerDir: str = "slurm",
    ):
        self.root = root
        self.uid = uid
        self.fs = fs
        self.schedulerDir = schedulerDir

    def controller_root(self, controller: Controller) -> str:
        return posixpath.join(self.root, controller.value)

    @abstractmethod
    def candidates(self, jobId: str, controller: Controller) -> List[str]:
        pass

    def resolve(self, jobId: str, controller: Controller) -> ControllerPath:
        """
        Finds the accounting directory of the job for the controller,
        taking the first candidate that is a directory holding a
        tasks file.
        """
        if not jobId:
            raise PreconditionError("job id is mandatory")
        controllerRoot = self.controller_root(controller)
        if not self.fs.is_dir(controllerRoot):
            raise ControllerUnsupportedError(controller.value, controllerRoot)
        tried = self.candidates(jobId, controller)
        for path in tried:
            if self.fs.is_dir(path) and self.fs.is_file(
                posixpath.join(path, self.TASKS_FILE)
            ):
                logger.debug(f"{controller.value} cgroup found at {path}")
                return ControllerPath(
                    controller=controller,
                    status=ResolutionStatus.RESOLVED,
                    path=path,
                    triedPaths=tried,
                )
        raise JobPathUnresolvedError(controller.value, jobId, tried)

    def lookup(self, jobId: str, controller: Controller) -> ControllerPath:
        """
        Same as resolve, but reports a missing controller or job
        directory in the returned path instead of raising.
        """
        try:
            return self.resolve(jobId, controller)
        except ControllerUnsupportedError:
            return ControllerPath(
                controller=controller,
                status=ResolutionStatus.UNSUPPORTED,
                path=None,
                triedPaths=[],
            )
        except JobPathUnresolvedError as e:
            return ControllerPath(
                controller=controller,
                status=ResolutionStatus.UNRESOLVED,
                path=None,
                triedPaths=e.tried,
            )


class SlurmCgroupPathRepository(AbstractCgroupPathRepository):
    """
    Implements the cgroup v1 layout created by the Slurm
    proctrack / task cgroup plugins.

    The main premises are:
        - A scheduler folder inside each controller hierarchy
        - Jobs grouped by user (uid_<uid>) or placed directly
          in the scheduler folder
        - The batch step in a step_batch subfolder of the job,
          only tried after the job folder itself
    """

    def candidates(self, jobId: str, controller: Controller) -> List[str]:
        base = posixpath.join(
            self.controller_root(controller), self.schedulerDir
        )
        userJob = posixpath.join(base, f"uid_{self.uid}", f"job_{jobId}")
        job = posixpath.join(base, f"job_{jobId}")
        return [
            userJob,
            job,
            posixpath.join(userJob, "step_batch"),
            posixpath.join(job, "step_batch"),
        ]


SUPPORTED_LAYOUTS: Dict[str, Type[AbstractCgroupPathRepository]] = {
    "SLURM": SlurmCgroupPathRepository,
}
DEFAULT = SlurmCgroupPathRepository


def factory(kind: str) -> Type[AbstractCgroupPathRepository]:
    return SUPPORTED_LAYOUTS.get(kind, DEFAULT)
