import logging
from datetime import datetime
from typing import List, Optional

from cgroupmon.adapters.cgrouppathrepository import (
    AbstractCgroupPathRepository,
)
from cgroupmon.adapters.metricsrepository import factory as metrics_factory
from cgroupmon.internal.errors import NoControllersError, PreconditionError
from cgroupmon.internal.fs import AbstractFileSystem
from cgroupmon.models.controller import Controller
from cgroupmon.models.controllerpath import ControllerPath
from cgroupmon.models.jobreport import JobReport, MonitorMode

logger = logging.getLogger(__name__)

STRICT_CONTROLLERS = [Controller.CPU, Controller.MEMORY]
LENIENT_CONTROLLERS = [Controller.CPU, Controller.MEMORY, Controller.BLKIO]


def default_controllers(mode: MonitorMode) -> List[Controller]:
    if mode == MonitorMode.STRICT:
        return list(STRICT_CONTROLLERS)
    return list(LENIENT_CONTROLLERS)


class JobMonitor:
    """
    Takes a snapshot of the resource usage of a job: resolves the
    accounting directory of each controller and reads the metrics
    of the ones that were found.

    In STRICT mode every requested controller must be found. In
    LENIENT mode a missing controller is only reported as not
    available, unless none of them is found.
    """

    def __init__(
        self,
        repository: AbstractCgroupPathRepository,
        fs: AbstractFileSystem,
        mode: MonitorMode = MonitorMode.LENIENT,
    ):
        self.repository = repository
        self.fs = fs
        self.mode = mode

    def resolve_paths(
        self, jobId: str, controllers: List[Controller]
    ) -> List[ControllerPath]:
        if not jobId:
            raise PreconditionError(
                "SLURM_JOB_ID not found. Are you running inside a Slurm job?"
            )
        paths: List[ControllerPath] = []
        for controller in controllers:
            if self.mode == MonitorMode.STRICT:
                paths.append(self.repository.resolve(jobId, controller))
                continue
            path = self.repository.lookup(jobId, controller)
            if not path.available:
                logger.warning(
                    f"{controller.value} cgroup not available for job"
                    + f" {jobId} ({path.status.value}), skipping"
                )
            paths.append(path)
        if not any(p.available for p in paths):
            raise NoControllersError(
                "No cgroup controllers found. Check Slurm cgroup configuration."
            )
        return paths

    def collect(
        self, jobId: str, controllers: Optional[List[Controller]] = None
    ) -> JobReport:
        if controllers is None:
            controllers = default_controllers(self.mode)
        paths = self.resolve_paths(jobId, controllers)
        report = JobReport(
            jobId=jobId,
            mode=self.mode,
            controllers=controllers,
            paths=paths,
            timeInstant=datetime.now(),
        )
        for p in paths:
            if not p.available:
                continue
            metrics = metrics_factory(p.controller, self.fs).extract(p.path)
            if p.controller == Controller.CPU:
                report.cpu = metrics
            elif p.controller == Controller.MEMORY:
                report.memory = metrics
            elif p.controller == Controller.BLKIO:
                report.io = metrics
        return report
