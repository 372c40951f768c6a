"""Rendering and export of inspection reports."""

from collections.abc import Mapping
from io import StringIO
from logging import getLogger
from pathlib import Path
from typing import Any, NamedTuple

from ruamel.yaml import YAML

from .types import Finding, Severity, TaskOutcome
from .utils import atomic_write_file, blue, green, red, yellow

logger = getLogger("hostinspect.report")

_colors = {
    Severity.CRITICAL: red,
    Severity.NORMAL: yellow,
    Severity.SLIGHT: blue,
}


class Report(NamedTuple):
    """A named tuple that represents the inspection of one machine.

    Attributes:
        machine: The name of the machine.
        role: The role of the machine.
        address: The `host:port` the machine was inspected at.
        result: The merged result-map.
        findings: The findings of all tasks.
        outcomes: How every task went.
    """

    machine: str
    role: str
    address: str
    result: dict[str, Any]
    findings: list[Finding]
    outcomes: list[TaskOutcome]

    def counts(self) -> dict[Severity, int]:
        """Counts the findings per severity."""
        counts = {s: 0 for s in Severity}
        for f in self.findings:
            counts[f.level] += 1
        return counts


def render(report: Report) -> list[str]:
    """Formats a report for the terminal.

    Args:
        report: The report to format.

    Returns:
        The lines of the formatted report.
    """
    lines = [f"Machine: {report.machine} ({report.role}) at {report.address}"]

    lines.append("  Tasks:")
    for outcome in report.outcomes:
        state = green("ok") if outcome.ok else yellow("degraded")
        lines.append(f"    {outcome.name:<24} {state} ({outcome.elapsed:.2f}s)")
        lines += [f"      {e}" for e in outcome.errors]

    lines.append("  Results:")
    lines += [f"    {key}: {value}" for key, value in sorted(report.result.items())]

    if not report.findings:
        lines.append("  Findings: " + green("none"))
        return lines

    summary = ", ".join(f"{n} {s.label.lower()}" for s, n in report.counts().items() if n)
    lines.append(f"  Findings: {summary}")
    for f in report.findings:
        color = _colors[f.level]
        lines.append(f"    [{color(f.level_display)}] {f.desc}")
    return lines


def _plain(value: Any) -> Any:
    """Converts a value to types the safe YAML dumper can represent."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set):
        return [_plain(v) for v in value]
    if isinstance(value, bool | int | float) or value is None:
        return value
    return str(value)


def to_dict(report: Report) -> dict[str, Any]:
    """Converts a report to plain data."""
    return {
        "machine": report.machine,
        "role": str(report.role),
        "address": report.address,
        "result": _plain(report.result),
        "findings": [
            {
                "level": str(f.level),
                "level_display": f.level_display,
                "desc": f.desc,
                "node_name": f.node_name,
            }
            for f in report.findings
        ],
        "tasks": [
            {
                "name": o.name,
                "status": str(o.status),
                "errors": list(o.errors),
                "elapsed": round(o.elapsed, 2),
            }
            for o in report.outcomes
        ],
    }


def export(reports: list[Report], path: Path) -> Path:
    """Writes reports to a YAML file.

    Args:
        reports: The reports to write.
        path: The target file, parent directories are created.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    stream = StringIO()
    yaml.dump({"reports": [to_dict(r) for r in reports]}, stream)
    atomic_write_file(stream.getvalue(), path)
    logger.debug("wrote %d reports to %s", len(reports), path)
    return path
