"""Configuration package for share conversion simulations.

This package provides configuration management for protocol runs.

Usage:
    from share_conversion.configs import load_scenario, list_scenarios

    # List available scenarios
    scenarios = list_scenarios()

    # Load a specific scenario
    config = load_scenario("long_message")
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

CONFIGS_DIR = Path(__file__).parent
SCENARIOS_DIR = CONFIGS_DIR / "scenarios"


def load_base_config() -> Dict[str, Any]:
    """Load the base configuration.

    Returns
    -------
    Dict[str, Any]
        Base configuration dictionary.
    """
    base_path = CONFIGS_DIR / "base.yaml"
    if not base_path.exists():
        return {}

    with open(base_path, "r") as f:
        return yaml.safe_load(f) or {}


def load_scenario(name: str) -> Dict[str, Any]:
    """Load a scenario configuration with base inheritance.

    Parameters
    ----------
    name : str
        Scenario name (without .yaml extension).

    Returns
    -------
    Dict[str, Any]
        Merged configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If scenario file doesn't exist.
    """
    scenario_path = SCENARIOS_DIR / f"{name}.yaml"
    if not scenario_path.exists():
        raise FileNotFoundError(f"Scenario not found: {scenario_path}")

    return load_config(scenario_path)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load an arbitrary YAML file merged over the base configuration.

    Parameters
    ----------
    path : str or Path
        Path to the YAML file.

    Returns
    -------
    Dict[str, Any]
        Merged configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    config = load_base_config()

    with open(path, "r") as f:
        override = yaml.safe_load(f) or {}

    return _deep_merge(config, override)


def list_scenarios() -> List[str]:
    """List available scenarios.

    Returns
    -------
    List[str]
        List of scenario names.
    """
    if not SCENARIOS_DIR.exists():
        return []
    return sorted(f.stem for f in SCENARIOS_DIR.glob("*.yaml"))


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries.

    Parameters
    ----------
    base : Dict
        Base dictionary.
    override : Dict
        Override dictionary (values take precedence).

    Returns
    -------
    Dict
        Merged dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


__all__ = [
    "load_base_config",
    "load_scenario",
    "load_config",
    "list_scenarios",
    "CONFIGS_DIR",
    "SCENARIOS_DIR",
]
