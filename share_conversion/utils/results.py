"""Result handling utilities for protocol simulations.

Provides functions for saving, loading, and summarising simulation results
in JSON and CSV formats.

Notes
-----
Results carry only public information: whether the reconstructed output
matched the clear-text reference, timings and abort reasons. Shares and
secret inputs are never written.
"""

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from share_conversion.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RunResult:
    """Result from a single protocol run.

    Attributes
    ----------
    protocol : str
        Protocol name ("e2f" or "ghash").
    run_id : int
        Index of this run within the scenario.
    success : bool
        Whether the protocol completed without aborting.
    matches_reference : Optional[bool]
        Whether the reconstructed output equals the clear-text reference.
    num_blocks : int
        Number of message blocks hashed (GHASH only).
    error_message : Optional[str]
        Error message if the protocol aborted.
    duration_ms : float
        Execution time in milliseconds.
    """

    protocol: str
    run_id: int
    success: bool
    matches_reference: Optional[bool] = None
    num_blocks: int = 0
    error_message: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class ScenarioResult:
    """Aggregated results from a scenario execution.

    Attributes
    ----------
    scenario_name : str
        Name of the scenario.
    timestamp : str
        ISO timestamp when the scenario was executed.
    config : Dict[str, Any]
        Configuration used for the scenario.
    runs : List[RunResult]
        Results from individual runs.
    summary : Dict[str, Any]
        Computed summary statistics.
    """

    scenario_name: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    config: Dict[str, Any] = field(default_factory=dict)
    runs: List[RunResult] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def all_correct(self) -> bool:
        """True if every run succeeded and matched its reference."""
        return all(r.success and r.matches_reference for r in self.runs)

    def compute_summary(self) -> Dict[str, Any]:
        """Compute summary statistics from runs.

        Returns
        -------
        Dict[str, Any]
            Summary statistics including success rate and timings.
        """
        if not self.runs:
            return {}

        successful_runs = [r for r in self.runs if r.success]
        failed_runs = [r for r in self.runs if not r.success]

        summary: Dict[str, Any] = {
            "total_runs": len(self.runs),
            "successful_runs": len(successful_runs),
            "failed_runs": len(failed_runs),
            "success_rate": len(successful_runs) / len(self.runs),
        }

        if successful_runs:
            durations = [r.duration_ms for r in successful_runs]
            summary.update({
                "avg_duration_ms": float(np.mean(durations)),
                "std_duration_ms": float(np.std(durations)),
                "max_duration_ms": float(np.max(durations)),
                "reference_match_rate": sum(
                    1 for r in successful_runs if r.matches_reference
                ) / len(successful_runs),
            })

        if failed_runs:
            error_counts: Dict[str, int] = {}
            for r in failed_runs:
                err = r.error_message or "Unknown"
                error_counts[err] = error_counts.get(err, 0) + 1
            summary["error_distribution"] = error_counts

        self.summary = summary
        return summary


def save_results_json(
    results: Union[ScenarioResult, List[ScenarioResult]],
    output_path: Union[str, Path],
) -> Path:
    """Save results to JSON file.

    Parameters
    ----------
    results : Union[ScenarioResult, List[ScenarioResult]]
        Results to save.
    output_path : Union[str, Path]
        Output file path (will add .json extension if missing).

    Returns
    -------
    Path
        Path to the saved file.
    """
    output_path = Path(output_path)
    if output_path.suffix != ".json":
        output_path = output_path.with_suffix(".json")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(results, ScenarioResult):
        results = [results]

    data = []
    for result in results:
        data.append({
            "scenario_name": result.scenario_name,
            "timestamp": result.timestamp,
            "config": result.config,
            "runs": [asdict(run) for run in result.runs],
            "summary": result.summary,
        })

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved results to {output_path}")
    return output_path


def save_results_csv(
    results: Union[ScenarioResult, List[ScenarioResult]],
    output_path: Union[str, Path],
) -> Path:
    """Save results to CSV file (one row per run).

    Parameters
    ----------
    results : Union[ScenarioResult, List[ScenarioResult]]
        Results to save.
    output_path : Union[str, Path]
        Output file path (will add .csv extension if missing).

    Returns
    -------
    Path
        Path to the saved file.
    """
    output_path = Path(output_path)
    if output_path.suffix != ".csv":
        output_path = output_path.with_suffix(".csv")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(results, ScenarioResult):
        results = [results]

    rows = []
    for scenario in results:
        for run in scenario.runs:
            row = {"scenario": scenario.scenario_name, "timestamp": scenario.timestamp}
            row.update(asdict(run))
            rows.append(row)

    if not rows:
        logger.warning("No results to save")
        return output_path

    fieldnames = list(rows[0].keys())
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    logger.info(f"Saved results to {output_path}")
    return output_path


def load_results_json(input_path: Union[str, Path]) -> List[ScenarioResult]:
    """Load results from JSON file.

    Parameters
    ----------
    input_path : Union[str, Path]
        Path to JSON file.

    Returns
    -------
    List[ScenarioResult]
        Loaded results.
    """
    input_path = Path(input_path)

    with open(input_path, "r") as f:
        data = json.load(f)

    results = []
    for item in data:
        runs = [RunResult(**run) for run in item.get("runs", [])]
        results.append(ScenarioResult(
            scenario_name=item["scenario_name"],
            timestamp=item.get("timestamp", ""),
            config=item.get("config", {}),
            runs=runs,
            summary=item.get("summary", {}),
        ))

    return results


def generate_result_filename(scenario_name: str, extension: str = "json") -> str:
    """Generate a timestamped filename for results.

    Parameters
    ----------
    scenario_name : str
        Name of the scenario.
    extension : str
        File extension (without dot).

    Returns
    -------
    str
        Generated filename.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{scenario_name}_{timestamp}.{extension}"


def generate_summary_report(results: List[ScenarioResult]) -> str:
    """Generate a text summary report of results.

    Parameters
    ----------
    results : List[ScenarioResult]
        Results to summarize. Summaries must have been computed.

    Returns
    -------
    str
        The generated report text.
    """
    lines = []
    lines.append("=" * 70)
    lines.append("SHARE CONVERSION SIMULATION RESULTS")
    lines.append("=" * 70)
    lines.append(f"Total scenarios: {len(results)}")
    lines.append("")

    for scenario in results:
        lines.append("-" * 70)
        lines.append(f"Scenario: {scenario.scenario_name}")
        lines.append("")

        s = scenario.summary
        if not s:
            lines.append("  No summary available")
            lines.append("")
            continue

        lines.append(f"  Total runs:      {s.get('total_runs', 0)}")
        lines.append(f"  Successful:      {s.get('successful_runs', 0)}")
        lines.append(f"  Failed:          {s.get('failed_runs', 0)}")
        lines.append(f"  Success rate:    {s.get('success_rate', 0) * 100:.1f}%")

        if s.get("reference_match_rate") is not None:
            lines.append(f"  Reference match: {s['reference_match_rate'] * 100:.1f}%")
            lines.append(
                f"  Duration (avg):  {s['avg_duration_ms']:.1f} ms "
                f"± {s.get('std_duration_ms', 0):.1f}"
            )

        if s.get("error_distribution"):
            lines.append("  Errors:")
            for err, count in s["error_distribution"].items():
                lines.append(f"    - {err}: {count}")

        lines.append("")

    lines.append("=" * 70)
    return "\n".join(lines)
