#!/usr/bin/env python3
"""Run share conversion protocol simulations.

This script drives the E2F and GHASH share protocols end to end, checks
each reconstructed output against its clear-text reference, and reports
the results.

Usage:
    python -m share_conversion.scripts.run_simulation                 # base config
    python -m share_conversion.scripts.run_simulation --scenario quick
    python -m share_conversion.scripts.run_simulation --protocol ghash --block-num 16

Examples:
    # Several E2F runs with a fixed seed
    python -m share_conversion.scripts.run_simulation --protocol e2f --num-runs 5 --seed 7

    # Save results as JSON
    python -m share_conversion.scripts.run_simulation --scenario long_message --output results/long

    # Debug mode (phase transitions of every party)
    python -m share_conversion.scripts.run_simulation --log-level DEBUG --num-runs 1
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

import numpy as np

from share_conversion.configs import load_base_config, load_config, load_scenario
from share_conversion.core.constants import (
    DEFAULT_BLOCK_NUM,
    DEFAULT_NUM_RUNS,
    DEFAULT_SEED,
    PROTOCOL_E2F,
    PROTOCOL_GHASH,
)
from share_conversion.core.exceptions import ShareConversionError
from share_conversion.e2f import Prover as E2FProver
from share_conversion.e2f import Verifier as E2FVerifier
from share_conversion.e2f import add_points_x, point_to_field, random_point, run_e2f
from share_conversion.fields.elements import GF2_128
from share_conversion.ghash import Prover as GhashProver
from share_conversion.ghash import Verifier as GhashVerifier
from share_conversion.ghash import ghash_shares, reference_ghash
from share_conversion.utils.logging import get_logger, set_log_level
from share_conversion.utils.results import (
    RunResult,
    ScenarioResult,
    generate_summary_report,
    save_results_json,
)

logger = get_logger(__name__)


def _party_rngs(seed: int, run_id: int, protocol: str) -> List[np.random.Generator]:
    """Independent generators for inputs, prover, verifier and the OLE."""
    tag = 0 if protocol == PROTOCOL_E2F else 1
    children = np.random.SeedSequence([seed, tag, run_id]).spawn(4)
    return [np.random.default_rng(child) for child in children]


def run_e2f_trial(run_id: int, seed: int) -> RunResult:
    """Run E2F on a fresh random point pair.

    Parameters
    ----------
    run_id : int
        Index of this run.
    seed : int
        Scenario seed.

    Returns
    -------
    RunResult
        Outcome, with ``matches_reference`` comparing against ``ecdsa``.
    """
    input_rng, prover_rng, verifier_rng, ole_rng = _party_rngs(seed, run_id, PROTOCOL_E2F)

    point1 = random_point(input_rng)
    point2 = random_point(input_rng)

    try:
        transcript = run_e2f(
            point_to_field(point1),
            point_to_field(point2),
            prover=E2FProver(rng=prover_rng),
            verifier=E2FVerifier(rng=verifier_rng),
            rng=ole_rng,
        )
    except ShareConversionError as e:
        return RunResult(
            protocol=PROTOCOL_E2F,
            run_id=run_id,
            success=False,
            error_message=f"{type(e).__name__}: {e}",
        )

    return RunResult(
        protocol=PROTOCOL_E2F,
        run_id=run_id,
        success=True,
        matches_reference=transcript.x == add_points_x(point1, point2),
        duration_ms=transcript.duration_ms,
    )


def run_ghash_trial(run_id: int, seed: int, block_num: int) -> RunResult:
    """Run GHASH share on random blocks and a random key split.

    Parameters
    ----------
    run_id : int
        Index of this run.
    seed : int
        Scenario seed.
    block_num : int
        Number of message blocks.

    Returns
    -------
    RunResult
        Outcome, with ``matches_reference`` comparing against Horner evaluation.
    """
    input_rng, prover_rng, verifier_rng, ole_rng = _party_rngs(seed, run_id, PROTOCOL_GHASH)

    blocks = [GF2_128.random(input_rng) for _ in range(block_num)]
    h1 = GF2_128.random(input_rng)
    h2 = GF2_128.random(input_rng)

    try:
        transcript = ghash_shares(
            blocks,
            GhashProver(block_num, h1, rng=prover_rng),
            GhashVerifier(block_num, h2, rng=verifier_rng),
            rng=ole_rng,
        )
    except ShareConversionError as e:
        return RunResult(
            protocol=PROTOCOL_GHASH,
            run_id=run_id,
            success=False,
            num_blocks=block_num,
            error_message=f"{type(e).__name__}: {e}",
        )

    return RunResult(
        protocol=PROTOCOL_GHASH,
        run_id=run_id,
        success=True,
        matches_reference=transcript.value == reference_ghash(blocks, h1 + h2),
        num_blocks=block_num,
        duration_ms=transcript.duration_ms,
    )


def run_scenario(name: str, config: Dict[str, Any]) -> List[ScenarioResult]:
    """Run every enabled protocol of a scenario.

    Parameters
    ----------
    name : str
        Scenario name used in the results.
    config : Dict[str, Any]
        Merged configuration (see ``configs/base.yaml``).

    Returns
    -------
    List[ScenarioResult]
        One result per enabled protocol, with summaries computed.
    """
    simulation = config.get("simulation", {})
    num_runs = simulation.get("num_runs", DEFAULT_NUM_RUNS)
    seed = simulation.get("seed", DEFAULT_SEED)

    results = []

    if config.get("e2f", {}).get("enabled", True):
        scenario = ScenarioResult(scenario_name=f"{name}/{PROTOCOL_E2F}", config=config)
        for run_id in range(num_runs):
            scenario.runs.append(run_e2f_trial(run_id, seed))
        scenario.compute_summary()
        results.append(scenario)

    ghash_config = config.get("ghash", {})
    if ghash_config.get("enabled", True):
        block_num = ghash_config.get("block_num", DEFAULT_BLOCK_NUM)
        scenario = ScenarioResult(scenario_name=f"{name}/{PROTOCOL_GHASH}", config=config)
        for run_id in range(num_runs):
            scenario.runs.append(run_ghash_trial(run_id, seed, block_num))
        scenario.compute_summary()
        results.append(scenario)

    return results


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Run E2F and GHASH share conversion simulations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # Configuration source
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Scenario name from configs/scenarios (default: base config)",
    )
    source.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file merged over the base config",
    )

    # Overrides
    parser.add_argument(
        "--protocol",
        choices=[PROTOCOL_E2F, PROTOCOL_GHASH, "all"],
        default=None,
        help="Restrict the run to one protocol (default: as configured)",
    )
    parser.add_argument(
        "--num-runs",
        type=int,
        default=None,
        help="Number of independent runs per protocol",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Scenario seed for reproducible runs",
    )
    parser.add_argument(
        "--block-num",
        type=int,
        default=None,
        help="Number of GHASH message blocks",
    )

    # Output
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write results as JSON to this path",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the selected config and apply command line overrides."""
    if args.scenario:
        config = load_scenario(args.scenario)
    elif args.config:
        config = load_config(args.config)
    else:
        config = load_base_config()

    simulation = config.setdefault("simulation", {})
    e2f = config.setdefault("e2f", {})
    ghash = config.setdefault("ghash", {})

    if args.num_runs is not None:
        simulation["num_runs"] = args.num_runs
    if args.seed is not None:
        simulation["seed"] = args.seed
    if args.log_level is not None:
        simulation["log_level"] = args.log_level
    if args.block_num is not None:
        ghash["block_num"] = args.block_num
    if args.protocol in (PROTOCOL_E2F, PROTOCOL_GHASH):
        e2f["enabled"] = args.protocol == PROTOCOL_E2F
        ghash["enabled"] = args.protocol == PROTOCOL_GHASH

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns
    -------
    int
        Exit code (0 if every run matched its reference, 1 otherwise).
    """
    args = parse_args(argv)

    try:
        config = build_config(args)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    set_log_level(config["simulation"].get("log_level", "WARNING"))

    name = args.scenario or "base"
    results = run_scenario(name, config)

    print(generate_summary_report(results))

    if args.output:
        save_results_json(results, args.output)

    return 0 if all(result.all_correct for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
