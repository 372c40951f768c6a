import pytest

from hostinspect.tasks import OsInfoTask, TaskInitError, TaskRunError
from hostinspect.tasks.osinfo import parse_df, parse_free, parse_os_release
from hostinspect.types import Options, Severity

from .utils import HEALTHY_OS


def test_parse_os_release():
    text = 'NAME="openSUSE Leap"\nVERSION="15.5"\nID="opensuse-leap"\nVERSION_ID="15.5"\n'
    assert parse_os_release(text) == ("openSUSE Leap", "15.5")


def test_parse_os_release_empty():
    assert parse_os_release("") == ("Unknown", "")


def test_parse_free():
    assert parse_free(HEALTHY_OS["free -m"]) == {"total": 7821, "used": 2100, "available": 5400}


def test_parse_free_old_procps():
    text = (
        "             total       used       free     shared    buffers     cached\n"
        "Mem:          1000        600        400          0         10        100\n"
    )
    assert parse_free(text) == {"total": 1000, "used": 600, "available": 400}


def test_parse_free_without_memory_line():
    with pytest.raises(ValueError):
        parse_free("garbage")


def test_parse_df():
    assert parse_df(HEALTHY_OS["df -P /"]) == {
        "filesystem": "/dev/sda1",
        "mount": "/",
        "usage": 31,
    }


def run_task(machine, options=None):
    task = OsInfoTask(machine)
    task.init(options or Options())
    task.run()
    return task.get_result()


def test_healthy_machine(connected_machine):
    result, findings = run_task(connected_machine(outputs=HEALTHY_OS))

    assert findings == []
    assert result == {
        "os.hostname": "node01",
        "os.distribution": "Rocky Linux",
        "os.version": "9.3",
        "os.kernel": "5.14.0-362.el9.x86_64",
        "os.cpu_count": 4,
        "os.load_average": [0.15, 0.10, 0.05],
        "os.memory_total_mb": 7821,
        "os.memory_available_mb": 5400,
        "os.memory_usage": 31.0,
        "os.root_disk_usage": 31,
        "os.uptime_days": 10.0,
    }


@pytest.mark.parametrize(
    "usage,expected",
    [("79%", []), ("85%", [Severity.NORMAL]), ("95%", [Severity.CRITICAL])],
)
def test_disk_thresholds(connected_machine, usage, expected):
    outputs = dict(HEALTHY_OS)
    outputs["df -P /"] = HEALTHY_OS["df -P /"].replace("31%", usage)

    _, findings = run_task(connected_machine(outputs=outputs))
    assert [f.level for f in findings] == expected


def test_disk_thresholds_from_options(connected_machine):
    _, findings = run_task(
        connected_machine(outputs=HEALTHY_OS),
        Options({"disk_warning": "20", "disk_critical": "30"}),
    )
    assert [(f.level, f.desc) for f in findings] == [
        (Severity.CRITICAL, "disk usage of / at 31%")
    ]


def test_high_load_and_memory(connected_machine):
    outputs = dict(HEALTHY_OS)
    outputs["cat /proc/loadavg"] = "8.50 6.00 4.00 3/300 1234"
    outputs["free -m"] = (
        "       total  used  free  shared  buff/cache  available\n"
        "Mem:    1000   950    10       0          40         20"
    )

    _, findings = run_task(connected_machine(outputs=outputs))

    assert [f.level for f in findings] == [Severity.SLIGHT, Severity.SLIGHT]
    assert findings[0].desc == "1 minute load 8.5 exceeds CPU count 4"
    assert findings[1].desc == "memory usage at 98.0%"
    assert all(f.node_name == "node01" for f in findings)


def test_invalid_threshold_keeps_defaults(connected_machine):
    task = OsInfoTask(connected_machine(outputs=HEALTHY_OS))

    with pytest.raises(TaskInitError):
        task.init(Options({"disk_warning": "lots"}))
    task.run()

    assert task.disk_warning == 80
    assert task.get_result()[0]["os.root_disk_usage"] == 31


def test_failing_probes_keep_partial_result(connected_machine):
    outputs = {k: v for k, v in HEALTHY_OS.items() if k not in ("nproc", "free -m")}
    task = OsInfoTask(connected_machine(outputs=outputs))
    task.init(Options())

    with pytest.raises(TaskRunError) as e:
        task.run()

    assert str(e.value) == "General OS facts: failed probes: cpu, memory"
    result, _ = task.get_result()
    assert result["os.hostname"] == "node01"
    assert "os.cpu_count" not in result
    assert "os.memory_usage" not in result


def test_result_empty_before_run(connected_machine):
    task = OsInfoTask(connected_machine(outputs=HEALTHY_OS))
    task.init(Options())
    assert task.get_result() == ({}, [])
