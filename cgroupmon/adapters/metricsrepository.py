from abc import ABC, abstractmethod
from decimal import Decimal
import logging
import posixpath
from typing import Dict, List, Optional, Tuple, Type, Union

from cgroupmon.internal.errors import CounterFileMissingError
from cgroupmon.internal.fs import AbstractFileSystem
from cgroupmon.internal.units import NS_TO_S, TICKS_TO_S, truncated_ratio
from cgroupmon.models.controller import Controller
from cgroupmon.models.resourceusage import CpuMetrics, MemoryMetrics, IoMetrics

logger = logging.getLogger(__name__)

Metrics = Union[CpuMetrics, MemoryMetrics, IoMetrics]


class AbstractMetricsRepository(ABC):
    """
    Reads the accounting files of one controller. A file that cannot
    be read leaves its metric at the default value and does not
    affect the others.
    """

    def __init__(self, fs: AbstractFileSystem):
        self.fs = fs

    def _read(self, path: str, name: str) -> Optional[str]:
        try:
            return self.fs.read_text(posixpath.join(path, name))
        except CounterFileMissingError as e:
            logger.debug(str(e))
            return None

    def _read_int(self, path: str, name: str, default: int) -> int:
        content = self._read(path, name)
        if content is None:
            return default
        try:
            return int(content.strip())
        except ValueError:
            logger.debug(f"unexpected content in {name}: {content!r}")
            return default

    def _read_keyed(self, path: str, name: str) -> Dict[str, int]:
        """
        Parses files made of '<key> <value>' lines, such as
        cpuacct.stat and memory.stat.
        """
        content = self._read(path, name)
        values: Dict[str, int] = {}
        if content is None:
            return values
        for line in content.splitlines():
            fields = line.split()
            if len(fields) != 2:
                continue
            try:
                values[fields[0]] = int(fields[1])
            except ValueError:
                continue
        return values

    @abstractmethod
    def extract(self, path: str) -> Metrics:
        pass


class CpuMetricsRepository(AbstractMetricsRepository):
    USAGE_FILE = "cpuacct.usage"
    STAT_FILE = "cpuacct.stat"
    SHARES_FILE = "cpu.shares"
    QUOTA_FILE = "cpu.cfs_quota_us"
    PERIOD_FILE = "cpu.cfs_period_us"

    DEFAULT_SHARES = 1024
    DEFAULT_QUOTA = -1
    DEFAULT_PERIOD = 100000

    def extract(self, path: str) -> CpuMetrics:
        usageNs = self._read_int(path, self.USAGE_FILE, 0)
        stat = self._read_keyed(path, self.STAT_FILE)
        shares = self._read_int(path, self.SHARES_FILE, self.DEFAULT_SHARES)
        quota = self._read_int(path, self.QUOTA_FILE, self.DEFAULT_QUOTA)
        period = self._read_int(path, self.PERIOD_FILE, self.DEFAULT_PERIOD)
        cpuLimit = None
        if quota > 0 and period > 0:
            cpuLimit = truncated_ratio(quota, period, 2)
        return CpuMetrics(
            usageSeconds=truncated_ratio(usageNs, NS_TO_S, 3),
            userSeconds=truncated_ratio(stat.get("user", 0), TICKS_TO_S, 2),
            systemSeconds=truncated_ratio(
                stat.get("system", 0), TICKS_TO_S, 2
            ),
            shares=shares,
            quota=quota,
            period=period,
            cpuLimit=cpuLimit,
        )


class MemoryMetricsRepository(AbstractMetricsRepository):
    USAGE_FILE = "memory.usage_in_bytes"
    LIMIT_FILE = "memory.limit_in_bytes"
    MAX_USAGE_FILE = "memory.max_usage_in_bytes"
    STAT_FILE = "memory.stat"
    FAILCNT_FILE = "memory.failcnt"

    # PAGE_COUNTER_MAX in bytes, written when no limit is set; the
    # value depends on the page size, 64K pages give the lowest one
    UNLIMITED = 0x7FFFFFFFFFFF0000

    def extract(self, path: str) -> MemoryMetrics:
        usage = self._read_int(path, self.USAGE_FILE, 0)
        limit = self._read_int(path, self.LIMIT_FILE, 0)
        maxUsage = self._read_int(path, self.MAX_USAGE_FILE, 0)
        stat = self._read_keyed(path, self.STAT_FILE)
        failCount = self._read_int(path, self.FAILCNT_FILE, 0)
        unlimited = limit >= self.UNLIMITED
        usagePercent = Decimal("0")
        if limit > 0 and usage > 0 and not unlimited:
            usagePercent = truncated_ratio(usage * 100, limit, 1)
        return MemoryMetrics(
            usage=usage,
            limit=limit,
            maxUsage=maxUsage,
            rss=stat.get("rss", 0),
            cache=stat.get("cache", 0),
            failCount=failCount,
            unlimited=unlimited,
            usagePercent=usagePercent,
        )


class BlkioMetricsRepository(AbstractMetricsRepository):
    # per-device files kept by the throttling policy come first,
    # the proportional weight policy files are the fallback
    SERVICE_BYTES_FILES = [
        "blkio.throttle.io_service_bytes",
        "blkio.io_service_bytes",
    ]
    SERVICED_FILES = [
        "blkio.throttle.io_serviced",
        "blkio.io_serviced",
    ]

    @staticmethod
    def parse_read_write(content: str) -> Tuple[int, int]:
        """
        Sums the 'Read' and 'Write' lines of a blkio file, formatted
        as '<major>:<minor> <operation> <value>'.
        """
        read = 0
        write = 0
        for line in content.splitlines():
            fields = line.split()
            if len(fields) != 3:
                continue
            try:
                value = int(fields[2])
            except ValueError:
                continue
            operation = fields[1].lower()
            if operation == "read":
                read += value
            elif operation == "write":
                write += value
        return read, write

    def __read_first(self, path: str, names: List[str]) -> Tuple[int, int]:
        for name in names:
            if not self.fs.is_file(posixpath.join(path, name)):
                continue
            content = self._read(path, name)
            if content is None:
                break
            return self.parse_read_write(content)
        return 0, 0

    def extract(self, path: str) -> IoMetrics:
        readBytes, writeBytes = self.__read_first(
            path, self.SERVICE_BYTES_FILES
        )
        readOps, writeOps = self.__read_first(path, self.SERVICED_FILES)
        return IoMetrics(
            readBytes=readBytes,
            writeBytes=writeBytes,
            readOps=readOps,
            writeOps=writeOps,
        )


SUPPORTED_CONTROLLERS: Dict[Controller, Type[AbstractMetricsRepository]] = {
    Controller.CPU: CpuMetricsRepository,
    Controller.MEMORY: MemoryMetricsRepository,
    Controller.BLKIO: BlkioMetricsRepository,
}


def factory(
    controller: Controller, fs: AbstractFileSystem
) -> AbstractMetricsRepository:
    return SUPPORTED_CONTROLLERS[controller](fs)
