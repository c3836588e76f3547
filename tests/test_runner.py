import pytest

from microbench.harness.runner import Harness, HarnessConfig


def test_calibration_picks_first_power_of_two_reaching_minimum(clock):
    harness = Harness(HarnessConfig(measure_rounds=5, minimum_duration_ms=100), clock=clock)
    result = harness.run("ten_ms", clock.workload(10))
    # 8 * 10ms = 80ms is too short, 16 * 10ms = 160ms is enough
    assert result.repeats == 16
    assert result.durations_ms == (160,) * 5
    assert result.noise_ms == 0
    assert result.median_nanos == pytest.approx(10_000_000.0)


def test_calibrated_repeats_bracket_the_minimum(clock):
    minimum = 50
    harness = Harness(HarnessConfig(measure_rounds=1, minimum_duration_ms=minimum), clock=clock)
    repeats = harness.calibrate(clock.workload(3))
    assert repeats == 32
    assert repeats * 3 >= minimum
    assert (repeats // 2) * 3 < minimum


def test_calibration_returns_one_for_slow_workload(clock):
    harness = Harness(HarnessConfig(minimum_duration_ms=5), clock=clock)
    assert harness.calibrate(clock.workload(10)) == 1


def test_max_repeats_stops_calibration(clock):
    config = HarnessConfig(measure_rounds=2, minimum_duration_ms=10, max_repeats=8)
    harness = Harness(config, clock=clock)
    # Costs nothing on the fake clock, so only the ceiling ends calibration
    result = harness.run("free", lambda: None)
    assert result.repeats == 8
    assert result.durations_ms == (0, 0)


def test_max_repeats_caps_doubling_to_ceiling(clock):
    harness = Harness(
        HarnessConfig(minimum_duration_ms=1000, max_repeats=5), clock=clock
    )
    assert harness.calibrate(clock.workload(1)) == 5


def test_measurement_rounds_and_noise_use_same_repeats(clock):
    calls = []

    def workload():
        calls.append(1)
        clock.advance(25)

    harness = Harness(HarnessConfig(measure_rounds=3, minimum_duration_ms=100), clock=clock)
    result = harness.run("counted", workload)
    assert result.repeats == 4
    # calibration 1 + 2 + 4, then three rounds of 4
    assert len(calls) == 1 + 2 + 4 + 3 * 4
    assert result.durations_ms == (100, 100, 100)


def test_results_accumulate_in_call_order_with_duplicate_descriptions(clock):
    harness = Harness(HarnessConfig(measure_rounds=1, minimum_duration_ms=10), clock=clock)
    first = harness.run("same", clock.workload(10))
    second = harness.run("same", clock.workload(20))
    third = harness.run("other", clock.workload(5))
    assert harness.results == (first, second, third)
    assert [r.description for r in harness.results] == ["same", "same", "other"]


def test_runs_are_independent(clock):
    harness = Harness(HarnessConfig(measure_rounds=1, minimum_duration_ms=40), clock=clock)
    slow = harness.run("slow", clock.workload(40))
    fast = harness.run("fast", clock.workload(5))
    assert slow.repeats == 1
    assert fast.repeats == 8


def test_run_all_preserves_order(clock):
    harness = Harness(HarnessConfig(measure_rounds=1, minimum_duration_ms=10), clock=clock)
    results = harness.run_all({"a": clock.workload(10), "b": clock.workload(5)})
    assert [r.description for r in results] == ["a", "b"]
    assert harness.results == tuple(results)


def test_workload_exception_propagates_and_records_nothing(clock):
    calls = []

    def flaky():
        calls.append(1)
        clock.advance(10)
        if len(calls) == 3:
            raise RuntimeError("workload failed")

    harness = Harness(HarnessConfig(measure_rounds=5, minimum_duration_ms=100), clock=clock)
    with pytest.raises(RuntimeError, match="workload failed"):
        harness.run("flaky", flaky)
    assert harness.results == ()


def test_results_property_is_a_snapshot(clock):
    harness = Harness(HarnessConfig(measure_rounds=1, minimum_duration_ms=10), clock=clock)
    before = harness.results
    harness.run("one", clock.workload(10))
    assert before == ()
    assert len(harness.results) == 1


def test_noop_workload_median_near_zero():
    harness = Harness(HarnessConfig(measure_rounds=3, minimum_duration_ms=10))
    result = harness.run("noop", lambda: None)
    assert result.repeats >= 1
    # Noise removal leaves at most a few milliseconds spread across many repeats
    assert abs(result.median_nanos) < 1_000.0
    assert result.min_nanos <= result.median_nanos <= result.max_nanos


def test_verbose_prints_progress(clock, capsys):
    harness = Harness(
        HarnessConfig(measure_rounds=2, minimum_duration_ms=10), clock=clock, verbose=True
    )
    harness.run("chatty", clock.workload(10))
    out = capsys.readouterr().out
    assert "Running benchmark: chatty" in out
    assert "Calibrated: 1 repeats" in out
    assert "Round 2/2: 10ms" in out
    assert "Noise 2/2: 0ms" in out


@pytest.mark.parametrize(
    "kwargs",
    [
        {"measure_rounds": 0},
        {"minimum_duration_ms": 0},
        {"max_repeats": 0},
    ],
)
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        HarnessConfig(**kwargs)


def test_config_defaults():
    config = HarnessConfig()
    assert config.to_dict() == {
        "measure_rounds": 5,
        "minimum_duration_ms": 500,
        "max_repeats": None,
    }


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("MICROBENCH_MEASURE_ROUNDS", "7")
    monkeypatch.setenv("MICROBENCH_MIN_DURATION_MS", "250")
    monkeypatch.delenv("MICROBENCH_MAX_REPEATS", raising=False)
    config = HarnessConfig.from_env()
    assert config.measure_rounds == 7
    assert config.minimum_duration_ms == 250
    assert config.max_repeats is None


def test_config_is_frozen_after_harness_is_built(clock):
    config = HarnessConfig(measure_rounds=3, minimum_duration_ms=10)
    harness = Harness(config, clock=clock)
    with pytest.raises(AttributeError):
        config.measure_rounds = 0
    assert harness.config.measure_rounds == 3
    assert len(harness.run("still_valid", clock.workload(10)).durations_ms) == 3


def test_config_from_env_names_non_integer_variable(monkeypatch):
    monkeypatch.setenv("MICROBENCH_MIN_DURATION_MS", "fast")
    with pytest.raises(ValueError, match="MICROBENCH_MIN_DURATION_MS must be an integer, got 'fast'"):
        HarnessConfig.from_env()


def test_verbose_reports_when_ceiling_stops_calibration(clock, capsys):
    harness = Harness(
        HarnessConfig(measure_rounds=1, minimum_duration_ms=100, max_repeats=4),
        clock=clock,
        verbose=True,
    )
    harness.calibrate(clock.workload(1))
    out = capsys.readouterr().out
    assert "Calibration hit max_repeats=4 at 4ms (< 100ms)" in out
    assert "Calibrated: 4 repeats (4ms)" in out
