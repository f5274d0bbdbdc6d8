#!/usr/bin/env python3
"""Generate metrics documentation in README.md from relayer_metrics/metrics.py."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Tuple

from prometheus_client import Counter

# Ensure project root is on the Python path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from relayer_metrics.metrics import MetricsRegistry  # noqa: E402

START_MARKER = "<!-- METRICS_START -->"
END_MARKER = "<!-- METRICS_END -->"


def collect_metrics() -> List[Tuple[str, str, str, Tuple[str, ...]]]:
    metrics: List[Tuple[str, str, str, Tuple[str, ...]]] = []
    for obj in MetricsRegistry().instruments():
        kind = "counter" if isinstance(obj, Counter) else "gauge"
        name = obj._name
        # counters are exposed with a _total suffix
        if kind == "counter":
            name += "_total"
        metrics.append((name, kind, obj._documentation, obj._labelnames))
    return sorted(metrics, key=lambda m: m[0])


def generate_table(metrics: List[Tuple[str, str, str, Tuple[str, ...]]]) -> str:
    lines = ["| Metric | Type | Description | Labels |", "|---|---|---|---|"]
    for name, kind, doc, labels in metrics:
        label_str = ", ".join(labels)
        lines.append(f"| `{name}` | {kind} | {doc} | {label_str} |")
    return "\n".join(lines)


def update_readme(readme: Path, table: str) -> None:
    content = readme.read_text()
    start = content.index(START_MARKER) + len(START_MARKER)
    end = content.index(END_MARKER)
    readme.write_text(content[:start] + "\n" + table + "\n" + content[end:])


def main() -> None:
    update_readme(ROOT / "README.md", generate_table(collect_metrics()))
    print("README.md updated")


if __name__ == "__main__":
    main()
