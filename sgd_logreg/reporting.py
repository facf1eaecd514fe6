"""JSON and plain-text rendering of sweep results."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .entities import SweepPoint

SweepTable = Mapping[float, SweepPoint]


def format_table(points: SweepTable, value_label: str) -> str:
    """Render a sweep as an aligned text table, one row per grid value."""
    header = f"{value_label:>12}  {'train acc':>9}  {'test acc':>9}  {'runs':>4}"
    lines: List[str] = [header, "-" * len(header)]
    for value, point in points.items():
        lines.append(
            f"{value:>12g}  {point.mean_train_accuracy:>9.4f}  {point.mean_test_accuracy:>9.4f}  {point.repetitions:>4d}"
        )
    return "\n".join(lines)


def build_report(
    results: Mapping[str, Mapping[str, SweepTable]],
    config: Optional[Mapping[str, object]] = None,
) -> Dict[str, object]:
    """Assemble a serializable report: pair name -> sweep name -> points."""
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "config": dict(config or {}),
        "pairs": {
            pair: {
                sweep: [point.to_mapping() for point in points.values()]
                for sweep, points in sweeps.items()
            }
            for pair, sweeps in results.items()
        },
    }


def write_report(
    path: Path,
    results: Mapping[str, Mapping[str, SweepTable]],
    config: Optional[Mapping[str, object]] = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_report(results, config), indent=2), encoding="utf-8")
    return path


__all__ = ["build_report", "format_table", "write_report"]
