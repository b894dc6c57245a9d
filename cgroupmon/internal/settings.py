import os


class Settings:
    jobId = os.getenv("SLURM_JOB_ID", "")
    cgroupRoot = os.getenv("CGROUP_ROOT", "/sys/fs/cgroup")
    schedulerDir = os.getenv("CGROUP_SCHEDULER_DIR", "slurm")
    layout = os.getenv("CGROUP_LAYOUT", "SLURM")
    uid = os.geteuid()
    mode = os.getenv("MONITOR_MODE", "LENIENT")
    log_level = os.getenv("LOG_LEVEL", "WARNING")

    @classmethod
    def read_environments(cls):
        cls.jobId = os.getenv("SLURM_JOB_ID", "")
        cls.cgroupRoot = os.getenv("CGROUP_ROOT", "/sys/fs/cgroup")
        cls.schedulerDir = os.getenv("CGROUP_SCHEDULER_DIR", "slurm")
        cls.layout = os.getenv("CGROUP_LAYOUT", "SLURM")
        cls.uid = int(os.getenv("CGROUP_UID", os.geteuid()))
        cls.mode = os.getenv("MONITOR_MODE", "LENIENT")
        cls.log_level = os.getenv("LOG_LEVEL", "WARNING")
