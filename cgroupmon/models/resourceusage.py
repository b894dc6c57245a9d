from decimal import Decimal
from pydantic import BaseModel
from typing import Optional


# cgroup v1 accounting:
# - CPU: cumulative time in nanoseconds, CFS quota / period in microseconds
# - MEM: instant and peak usage in bytes, limit in bytes
# - IO:  cumulative bytes and operations, summed over all block devices
class CpuMetrics(BaseModel):
    """
    Class for storing the CPU usage of a job and the share of
    the node it was granted.
    """

    usageSeconds: Decimal = Decimal("0.000")
    userSeconds: Decimal = Decimal("0.00")
    systemSeconds: Decimal = Decimal("0.00")
    shares: int = 1024
    quota: int = -1
    period: int = 100000
    # None when there is no CFS quota
    cpuLimit: Optional[Decimal] = None


class MemoryMetrics(BaseModel):
    """
    Class for storing the memory usage of a job against its limit.
    """

    usage: int = 0
    limit: int = 0
    maxUsage: int = 0
    rss: int = 0
    cache: int = 0
    failCount: int = 0
    unlimited: bool = False
    usagePercent: Decimal = Decimal("0")


class IoMetrics(BaseModel):
    """
    Class for storing the block I/O done by a job, summed over
    every device the controller reports.
    """

    readBytes: int = 0
    writeBytes: int = 0
    readOps: int = 0
    writeOps: int = 0
