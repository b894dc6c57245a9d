from cgroupmon.models.controller import Controller
from cgroupmon.models.controllerpath import ControllerPath, ResolutionStatus
from cgroupmon.models.jobreport import JobReport, MonitorMode
from cgroupmon.models.resourceusage import CpuMetrics, MemoryMetrics, IoMetrics
from cgroupmon.utils.reportwriter import (
    render_candidates,
    render_paths,
    render_text,
)
from datetime import datetime
from decimal import Decimal

CPU_PATH = "/sys/fs/cgroup/cpu/slurm/uid_1000/job_4242"
MEMORY_PATH = "/sys/fs/cgroup/memory/slurm/uid_1000/job_4242"


def make_paths():
    return [
        ControllerPath(
            controller=Controller.CPU,
            status=ResolutionStatus.RESOLVED,
            path=CPU_PATH,
            triedPaths=[CPU_PATH],
        ),
        ControllerPath(
            controller=Controller.MEMORY,
            status=ResolutionStatus.RESOLVED,
            path=MEMORY_PATH,
            triedPaths=[MEMORY_PATH],
        ),
        ControllerPath(
            controller=Controller.BLKIO,
            status=ResolutionStatus.UNSUPPORTED,
            path=None,
            triedPaths=[],
        ),
    ]


def make_report(**kwargs) -> JobReport:
    return JobReport(
        jobId="4242",
        mode=MonitorMode.LENIENT,
        controllers=[Controller.CPU, Controller.MEMORY, Controller.BLKIO],
        paths=make_paths(),
        timeInstant=datetime(2024, 1, 17, 15, 51, 53),
        **kwargs,
    )


def test_render_paths():
    lines = render_paths(make_paths()).split("\n")
    assert lines[0].split() == ["CPU:", CPU_PATH]
    assert lines[1].split() == ["Memory:", MEMORY_PATH]
    assert lines[2].split()[0] == "I/O:"
    assert lines[2].rstrip().endswith("[Not available]")


def test_render_text():
    r = make_report(
        cpu=CpuMetrics(
            usageSeconds=Decimal("1.500"),
            quota=50000,
            cpuLimit=Decimal("0.50"),
        ),
        memory=MemoryMetrics(
            usage=2147483648,
            limit=8589934592,
            maxUsage=3221225472,
            usagePercent=Decimal("25.0"),
        ),
    )
    text = render_text(r)
    assert text.startswith("Slurm Job 4242 Resource Usage (cgroup v1)")
    assert "CPU Usage (total): 1.500s" in text
    assert "CPU Shares: 1024" in text
    assert "CPU Quota/Period: 50000us / 100000us" in text
    assert "CPU Limit (CFS): 0.50 vCPUs" in text
    assert "Memory Usage: 2GiB / 8GiB (25.0%)" in text
    assert "Peak Memory:  3GiB" in text
    assert "I/O: [blkio controller not available]" in text
    assert text.endswith("Updated: 2024-01-17 15:51:53")


def test_render_text_defaults():
    r = make_report(cpu=CpuMetrics(), memory=MemoryMetrics(usage=2147483648))
    text = render_text(r)
    assert "CPU Usage (total): 0.000s" in text
    assert "CPU Limit (CFS): unlimited vCPUs" in text
    assert "Memory Usage: 2GiB / 0B (0%)" in text


def test_render_text_unlimited_memory_and_io():
    r = make_report(
        memory=MemoryMetrics(
            usage=1024, limit=9223372036854771712, unlimited=True
        ),
        io=IoMetrics(readBytes=1500, writeBytes=2048, readOps=15, writeOps=20),
    )
    text = render_text(r)
    assert "CPU: [Not available]" in text
    assert "Memory Usage: 1KiB / unlimited (0%)" in text
    assert "I/O Read:  1KiB (15 ops)" in text
    assert "I/O Write: 2KiB (20 ops)" in text


def test_render_text_strict_has_no_io_block():
    r = JobReport(
        jobId="4242",
        mode=MonitorMode.STRICT,
        controllers=[Controller.CPU, Controller.MEMORY],
        paths=make_paths()[:2],
        cpu=CpuMetrics(),
        memory=MemoryMetrics(),
        timeInstant=datetime(2024, 1, 17),
    )
    text = render_text(r)
    assert "=== I/O (blkio) ===" not in text


def test_render_candidates():
    tried = [
        "/sys/fs/cgroup/cpu/slurm/uid_1000/job_1",
        "/sys/fs/cgroup/cpu/slurm/job_1",
    ]
    text = render_candidates(
        [
            ControllerPath(
                controller=Controller.CPU,
                status=ResolutionStatus.RESOLVED,
                path=tried[1],
                triedPaths=tried,
            ),
            ControllerPath(
                controller=Controller.BLKIO,
                status=ResolutionStatus.UNSUPPORTED,
                path=None,
                triedPaths=[],
            ),
        ]
    )
    lines = text.split("\n")
    assert lines[0].split() == ["controller", "status", "candidate", "match"]
    assert lines[2].split() == ["cpu", "RESOLVED", tried[0]]
    assert lines[3].split() == [tried[1], "*"]
    assert lines[4].split() == ["blkio", "UNSUPPORTED"]
