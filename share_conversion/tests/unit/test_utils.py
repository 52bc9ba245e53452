"""Unit tests for configuration, results and logging utilities."""

import json
import logging

import pytest

from share_conversion.configs import (
    _deep_merge,
    list_scenarios,
    load_base_config,
    load_config,
    load_scenario,
)
from share_conversion.utils.logging import get_logger, get_protocol_logger, set_log_level
from share_conversion.utils.results import (
    RunResult,
    ScenarioResult,
    generate_result_filename,
    generate_summary_report,
    load_results_json,
    save_results_csv,
    save_results_json,
)


@pytest.fixture
def scenario_result():
    scenario = ScenarioResult(scenario_name="unit/ghash", config={"ghash": {"block_num": 2}})
    scenario.runs.append(RunResult("ghash", 0, True, True, num_blocks=2, duration_ms=1.5))
    scenario.runs.append(RunResult("ghash", 1, True, True, num_blocks=2, duration_ms=2.5))
    scenario.runs.append(
        RunResult("ghash", 2, False, error_message="DegenerateInput: omega is 0")
    )
    scenario.compute_summary()
    return scenario


# =============================================================================
# Configuration
# =============================================================================


class TestConfigs:
    """YAML configs with base inheritance."""

    def test_base_config(self):
        config = load_base_config()
        assert config["simulation"]["seed"] == 42
        assert config["ghash"]["block_num"] == 10
        assert config["e2f"]["enabled"] is True

    def test_list_scenarios(self):
        scenarios = list_scenarios()
        assert {"quick", "long_message", "e2f_batch"} <= set(scenarios)
        assert scenarios == sorted(scenarios)

    def test_scenario_overrides_base(self):
        config = load_scenario("long_message")
        assert config["ghash"]["block_num"] == 32
        assert config["ghash"]["enabled"] is True
        assert config["e2f"]["enabled"] is False
        assert config["simulation"]["seed"] == 42

    def test_missing_scenario_raises(self):
        with pytest.raises(FileNotFoundError):
            load_scenario("does_not_exist")

    def test_load_config_from_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("simulation:\n  num_runs: 9\n")

        config = load_config(path)
        assert config["simulation"]["num_runs"] == 9
        assert config["simulation"]["log_level"] == "WARNING"

    def test_empty_config_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == load_base_config()

    def test_deep_merge_does_not_mutate(self):
        base = {"a": {"b": 1, "c": 2}}
        merged = _deep_merge(base, {"a": {"b": 5}, "d": 3})
        assert merged == {"a": {"b": 5, "c": 2}, "d": 3}
        assert base == {"a": {"b": 1, "c": 2}}


# =============================================================================
# Results
# =============================================================================


class TestResults:
    """Summaries and persistence of run results."""

    def test_summary(self, scenario_result):
        s = scenario_result.summary
        assert s["total_runs"] == 3
        assert s["successful_runs"] == 2
        assert s["failed_runs"] == 1
        assert s["avg_duration_ms"] == pytest.approx(2.0)
        assert s["max_duration_ms"] == pytest.approx(2.5)
        assert s["reference_match_rate"] == 1.0
        assert s["error_distribution"] == {"DegenerateInput: omega is 0": 1}

    def test_all_correct(self, scenario_result):
        assert not scenario_result.all_correct
        scenario_result.runs.pop()
        assert scenario_result.all_correct

    def test_mismatch_is_not_correct(self):
        scenario = ScenarioResult(scenario_name="x")
        scenario.runs.append(RunResult("e2f", 0, True, False))
        assert not scenario.all_correct

    def test_empty_summary(self):
        assert ScenarioResult(scenario_name="empty").compute_summary() == {}

    def test_json_round_trip(self, scenario_result, tmp_path):
        path = save_results_json(scenario_result, tmp_path / "out" / "results")
        assert path.suffix == ".json"

        loaded = load_results_json(path)
        assert len(loaded) == 1
        assert loaded[0].scenario_name == "unit/ghash"
        assert loaded[0].runs == scenario_result.runs
        assert loaded[0].summary["total_runs"] == 3

    def test_json_is_plain(self, scenario_result, tmp_path):
        path = save_results_json([scenario_result], tmp_path / "r.json")
        data = json.loads(path.read_text())
        assert data[0]["config"] == {"ghash": {"block_num": 2}}

    def test_csv(self, scenario_result, tmp_path):
        path = save_results_csv(scenario_result, tmp_path / "results")
        lines = path.read_text().strip().splitlines()

        assert path.suffix == ".csv"
        assert lines[0].startswith("scenario,timestamp,protocol,run_id")
        assert len(lines) == 4

    def test_csv_without_runs(self, tmp_path):
        path = save_results_csv(ScenarioResult(scenario_name="empty"), tmp_path / "none")
        assert not path.exists()

    def test_result_filename(self):
        name = generate_result_filename("quick", "csv")
        assert name.startswith("quick_")
        assert name.endswith(".csv")

    def test_summary_report(self, scenario_result):
        report = generate_summary_report([scenario_result])
        assert "SHARE CONVERSION SIMULATION RESULTS" in report
        assert "Scenario: unit/ghash" in report
        assert "Success rate:    66.7%" in report
        assert "DegenerateInput: omega is 0: 1" in report

    def test_summary_report_without_summary(self):
        report = generate_summary_report([ScenarioResult(scenario_name="raw")])
        assert "No summary available" in report


# =============================================================================
# Logging
# =============================================================================


class TestLogging:
    """Namespaced loggers with a shared level."""

    @pytest.fixture(autouse=True)
    def restore_level(self):
        yield
        set_log_level("NOTSET")

    def test_namespace(self):
        assert get_logger("e2f").name == "share_conversion.e2f"
        assert get_logger("share_conversion.ghash").name == "share_conversion.ghash"
        assert get_protocol_logger("e2f.prover").name == "share_conversion.protocol.e2f.prover"

    def test_logger_is_cached(self):
        assert get_logger("cached") is get_logger("cached")

    def test_set_level_applies_to_existing_and_new(self):
        existing = get_logger("level.existing")
        set_log_level("debug")
        created = get_logger("level.created")

        assert existing.level == logging.DEBUG
        assert created.level == logging.DEBUG
