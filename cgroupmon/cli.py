import click
from typing import List, Optional, Tuple

from cgroupmon.adapters.cgrouppathrepository import factory as layout_factory
from cgroupmon.internal.errors import (
    CgroupMonitorError,
    JobPathUnresolvedError,
)
from cgroupmon.internal.fs import LocalFileSystem
from cgroupmon.internal.settings import Settings
from cgroupmon.models.controller import Controller
from cgroupmon.models.jobreport import MonitorMode
from cgroupmon.utils.jobmonitor import JobMonitor, default_controllers
from cgroupmon.utils.reportwriter import render_candidates, render_text

CONTROLLER_CHOICE = click.Choice([c.value for c in Controller])


def __parse_controllers(
    names: Tuple[str, ...], mode: MonitorMode
) -> List[Controller]:
    if len(names) == 0:
        return default_controllers(mode)
    return [Controller.factory(n) for n in names]


def __make_monitor(mode: MonitorMode) -> JobMonitor:
    fs = LocalFileSystem()
    repository = layout_factory(Settings.layout)(
        root=Settings.cgroupRoot,
        uid=Settings.uid,
        fs=fs,
        schedulerDir=Settings.schedulerDir,
    )
    return JobMonitor(repository, fs, mode)


@click.group()
def cli():
    """
    CLI interface for inspecting the resource usage of the
    current Slurm job through its cgroup v1 accounting files.
    """
    pass


@click.command("report")
@click.option(
    "--strict/--lenient",
    default=None,
    help="fail when a controller is not found (cpu and memory only)",
)
@click.option(
    "-c",
    "--controller",
    "controllers",
    multiple=True,
    type=CONTROLLER_CHOICE,
    help="controller to report, may be repeated",
)
@click.option(
    "-f",
    "--format",
    "fmt",
    default="text",
    type=click.Choice(["text", "json"]),
    help="output format",
)
@click.option("-j", "--jobid", default=None, help="id for the job")
def report(
    strict: Optional[bool],
    controllers: Tuple[str, ...],
    fmt: str,
    jobid: Optional[str],
):
    """
    Show the CPU, memory and I/O usage of the job.
    """
    if strict is None:
        mode = MonitorMode.factory(Settings.mode)
    else:
        mode = MonitorMode.STRICT if strict else MonitorMode.LENIENT
    jobId = jobid if jobid is not None else Settings.jobId
    monitor = __make_monitor(mode)
    try:
        r = monitor.collect(jobId, __parse_controllers(controllers, mode))
    except JobPathUnresolvedError as e:
        tried = "\n".join([f"  {p}" for p in e.tried])
        raise click.ClickException(f"{e}\nTried paths:\n{tried}")
    except CgroupMonitorError as e:
        raise click.ClickException(str(e))

    if fmt == "json":
        click.echo(r.model_dump_json(indent=2))
    else:
        click.echo(render_text(r))
        click.echo("Tip: Run in a loop: watch -n 5 cgroupmon report")


@click.command("paths")
@click.option(
    "-c",
    "--controller",
    "controllers",
    multiple=True,
    type=CONTROLLER_CHOICE,
    help="controller to look for, may be repeated",
)
@click.option("-j", "--jobid", default=None, help="id for the job")
def paths(controllers: Tuple[str, ...], jobid: Optional[str]):
    """
    List the candidate cgroup directories of the job and
    which of them was found.
    """
    jobId = jobid if jobid is not None else Settings.jobId
    if not jobId:
        raise click.ClickException(
            "SLURM_JOB_ID not found. Are you running inside a Slurm job?"
        )
    monitor = __make_monitor(MonitorMode.LENIENT)
    found = [
        monitor.repository.lookup(jobId, c)
        for c in __parse_controllers(controllers, MonitorMode.LENIENT)
    ]
    click.echo(render_candidates(found))


cli.add_command(report)
cli.add_command(paths)
