from typing import List


class CgroupMonitorError(Exception):
    """
    Base class for the errors raised while inspecting the
    accounting hierarchy of a job.
    """

    pass


class PreconditionError(CgroupMonitorError):
    """
    The job identifier is not available, so nothing can be resolved.
    """

    pass


class ControllerUnsupportedError(CgroupMonitorError):
    """
    The controller hierarchy is not mounted on this host.
    """

    def __init__(self, controller: str, root: str):
        self.controller = controller
        self.root = root
        super().__init__(f"{controller} cgroup not mounted at {root}")


class JobPathUnresolvedError(CgroupMonitorError):
    """
    The controller hierarchy exists but none of the candidate
    job directories was found.
    """

    def __init__(self, controller: str, jobId: str, tried: List[str]):
        self.controller = controller
        self.jobId = jobId
        self.tried = tried
        super().__init__(
            f"could not find {controller} cgroup for job {jobId}"
        )


class NoControllersError(CgroupMonitorError):
    """
    None of the requested controllers could be resolved.
    """

    pass


class CounterFileMissingError(CgroupMonitorError):
    """
    A single accounting file is absent or could not be read.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"counter file not available: {path}")
