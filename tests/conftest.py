from cgroupmon.adapters.cgrouppathrepository import factory
from cgroupmon.internal.fs import MemoryFileSystem
from tests.mocks.cgroup.v1 import ROOT, UID, UID_JOB_PATH, job_files
import pytest


@pytest.fixture
def fs() -> MemoryFileSystem:
    """
    Synthetic hierarchy with the job found under the per-user
    folder for every controller.
    """
    tree = MemoryFileSystem()
    for controller in ["cpu", "memory", "blkio"]:
        jobDir = UID_JOB_PATH.format(root=ROOT, controller=controller)
        for path, content in job_files(jobDir).items():
            tree.add_file(path, content)
    return tree


@pytest.fixture
def repository(fs):
    return factory("SLURM")(root=ROOT, uid=UID, fs=fs)
