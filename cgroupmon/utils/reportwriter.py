from typing import List

from tabulate import tabulate

from cgroupmon.internal.units import format_bytes
from cgroupmon.models.controller import Controller
from cgroupmon.models.controllerpath import ControllerPath
from cgroupmon.models.jobreport import JobReport
from cgroupmon.models.resourceusage import CpuMetrics, MemoryMetrics, IoMetrics

NOT_AVAILABLE = "[Not available]"
SEPARATOR = "=" * 40
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def __cpu_lines(cpu: CpuMetrics) -> List[str]:
    limit = "unlimited" if cpu.cpuLimit is None else str(cpu.cpuLimit)
    return [
        f"CPU Usage (total): {cpu.usageSeconds}s",
        f"CPU Time (user/system): {cpu.userSeconds}s / {cpu.systemSeconds}s",
        f"CPU Shares: {cpu.shares}",
        f"CPU Quota/Period: {cpu.quota}us / {cpu.period}us",
        f"CPU Limit (CFS): {limit} vCPUs",
    ]


def __memory_lines(memory: MemoryMetrics) -> List[str]:
    limit = "unlimited" if memory.unlimited else format_bytes(memory.limit)
    return [
        f"Memory Usage: {format_bytes(memory.usage)} / {limit}"
        + f" ({memory.usagePercent}%)",
        f"Peak Memory:  {format_bytes(memory.maxUsage)}",
        f"RSS / Cache:  {format_bytes(memory.rss)} / "
        + f"{format_bytes(memory.cache)}",
        f"Limit Hits:   {memory.failCount}",
    ]


def __io_lines(io: IoMetrics) -> List[str]:
    return [
        f"I/O Read:  {format_bytes(io.readBytes)} ({io.readOps} ops)",
        f"I/O Write: {format_bytes(io.writeBytes)} ({io.writeOps} ops)",
    ]


def render_paths(paths: List[ControllerPath]) -> str:
    rows = [
        [f"{p.controller.label}:", p.path if p.available else NOT_AVAILABLE]
        for p in paths
    ]
    return tabulate(rows, tablefmt="plain")


def render_text(report: JobReport) -> str:
    """
    Renders the report the way it is shown on the terminal, with
    one block per requested controller.
    """
    lines = [
        f"Slurm Job {report.jobId} Resource Usage (cgroup v1)",
        SEPARATOR,
        render_paths(report.paths),
        "",
    ]
    if Controller.CPU in report.controllers:
        lines.append("=== CPU ===")
        if report.cpu is None:
            lines.append(f"CPU: {NOT_AVAILABLE}")
        else:
            lines += __cpu_lines(report.cpu)
        lines.append("")
    if Controller.MEMORY in report.controllers:
        lines.append("=== Memory ===")
        if report.memory is None:
            lines.append(f"Memory: {NOT_AVAILABLE}")
        else:
            lines += __memory_lines(report.memory)
        lines.append("")
    if Controller.BLKIO in report.controllers:
        lines.append("=== I/O (blkio) ===")
        if report.io is None:
            lines.append("I/O: [blkio controller not available]")
        else:
            lines += __io_lines(report.io)
        lines.append("")
    lines.append(f"Updated: {report.timeInstant.strftime(TIME_FORMAT)}")
    return "\n".join(lines)


def render_candidates(paths: List[ControllerPath]) -> str:
    rows = []
    for p in paths:
        if not p.triedPaths:
            rows.append([p.controller.value, p.status.value, "", ""])
            continue
        for i, candidate in enumerate(p.triedPaths):
            rows.append(
                [
                    p.controller.value if i == 0 else "",
                    p.status.value if i == 0 else "",
                    candidate,
                    "*" if candidate == p.path else "",
                ]
            )
    return tabulate(
        rows, headers=["controller", "status", "candidate", "match"]
    )
