# tests/unit/engine/test_dishwasher.py
"""Tests for DishWasher.start() - the wash cycle sequence.

Each failing step must end the cycle before any later device is touched.
Call order is checked against a journal shared by all fake devices.
"""

import threading

import pytest

from dishwasher.contracts import (
    EngineError,
    FillLevel,
    ProgramConfiguration,
    PumpError,
    RunResult,
    Status,
    WashingProgram,
)
from dishwasher.engine import MAXIMAL_FILTER_CAPACITY, DishWasher
from tests.fixtures.configurations import standard_configuration
from tests.fixtures.devices import FULL_CYCLE_WITH_TABLETS, FULL_CYCLE_WITHOUT_TABLETS, DeviceRig


def _start(rig: DeviceRig, config: ProgramConfiguration) -> RunResult:
    return DishWasher(*rig.devices()).start(config)


class TestSuccessfulCycle:
    def test_starts_programme(self, rig: DeviceRig) -> None:
        result = _start(rig, standard_configuration(tablets_used=False))

        assert result.status == Status.SUCCESS

    def test_reports_eco_duration_without_consulting_filter(self, rig: DeviceRig) -> None:
        result = _start(rig, standard_configuration(tablets_used=False))

        assert result == RunResult(Status.SUCCESS, WashingProgram.ECO.time_in_minutes)
        assert rig.count("dirt_filter.capacity") == 0

    @pytest.mark.parametrize("program", list(WashingProgram))
    def test_runs_for_declared_duration_of_each_program(self, program: WashingProgram) -> None:
        rig = DeviceRig(capacity=29.0)
        config = ProgramConfiguration(fill_level=FillLevel.HALF, program=program, tablets_used=True)

        result = _start(rig, config)

        assert result.status == Status.SUCCESS
        assert result.run_minutes == program.time_in_minutes

    def test_uses_devices_in_exact_sequence_with_tablets(self) -> None:
        rig = DeviceRig(capacity=29.0)

        _start(rig, standard_configuration(tablets_used=True))

        assert rig.calls == FULL_CYCLE_WITH_TABLETS

    def test_uses_devices_in_exact_sequence_without_tablets(self, rig: DeviceRig) -> None:
        _start(rig, standard_configuration(tablets_used=False))

        assert rig.calls == FULL_CYCLE_WITHOUT_TABLETS

    def test_pours_configured_fill_level(self, rig: DeviceRig) -> None:
        config = ProgramConfiguration(fill_level=FillLevel.FULL, program=WashingProgram.RINSE, tablets_used=False)

        _start(rig, config)

        assert rig.water_pump.poured == [FillLevel.FULL]

    def test_runs_configured_program(self, rig: DeviceRig) -> None:
        config = ProgramConfiguration(fill_level=FillLevel.HALF, program=WashingProgram.NIGHT, tablets_used=False)

        _start(rig, config)

        assert rig.engine.programs == [WashingProgram.NIGHT]

    def test_filter_at_limit_is_accepted(self) -> None:
        rig = DeviceRig(capacity=MAXIMAL_FILTER_CAPACITY)

        result = _start(rig, standard_configuration(tablets_used=True))

        assert result.status == Status.SUCCESS

    def test_successive_cycles_are_independent(self, rig: DeviceRig) -> None:
        dishwasher = DishWasher(*rig.devices())

        first = dishwasher.start(standard_configuration(tablets_used=False))
        second = dishwasher.start(standard_configuration(tablets_used=False))

        assert first == second
        assert rig.calls == FULL_CYCLE_WITHOUT_TABLETS * 2


class TestDoorOpen:
    def test_returns_door_open(self) -> None:
        rig = DeviceRig(door_closed=False)

        result = _start(rig, standard_configuration(tablets_used=False))

        assert result == RunResult(Status.DOOR_OPEN, 0)

    @pytest.mark.parametrize("tablets_used", [True, False])
    def test_touches_nothing_but_the_door_sensor(self, tablets_used: bool) -> None:
        rig = DeviceRig(door_closed=False, capacity=99.0, pour_error=PumpError(), run_error=EngineError())

        _start(rig, standard_configuration(tablets_used=tablets_used))

        assert rig.calls == ["door.closed"]


class TestFilterOverloaded:
    def test_returns_error_filter(self) -> None:
        rig = DeviceRig(capacity=51.0)

        result = _start(rig, standard_configuration(tablets_used=True))

        assert result == RunResult(Status.ERROR_FILTER, 0)

    def test_does_not_lock_fill_or_run(self) -> None:
        rig = DeviceRig(capacity=51.0)

        _start(rig, standard_configuration(tablets_used=True))

        assert rig.calls == ["door.closed", "dirt_filter.capacity"]

    def test_overloaded_filter_is_ignored_without_tablets(self) -> None:
        rig = DeviceRig(capacity=100.0)

        result = _start(rig, standard_configuration(tablets_used=False))

        assert result.status == Status.SUCCESS
        assert rig.count("dirt_filter.capacity") == 0


class TestPumpFailure:
    def test_returns_error_pump(self) -> None:
        rig = DeviceRig(capacity=29.0, pour_error=PumpError())

        result = _start(rig, standard_configuration(tablets_used=True))

        assert result == RunResult(Status.ERROR_PUMP, 0)

    def test_engine_never_runs_on_unfilled_tub(self) -> None:
        rig = DeviceRig(pour_error=PumpError())

        _start(rig, standard_configuration(tablets_used=False))

        assert rig.count("engine.run_program") == 0
        assert rig.count("water_pump.drain") == 0
        assert rig.calls == ["door.closed", "door.lock", "water_pump.pour"]

    def test_pump_error_subclass_is_translated(self) -> None:
        class CloggedInlet(PumpError):
            pass

        rig = DeviceRig(pour_error=CloggedInlet("inlet clogged"))

        result = _start(rig, standard_configuration(tablets_used=False))

        assert result.status == Status.ERROR_PUMP


class TestEngineFailure:
    def test_returns_error_program(self) -> None:
        rig = DeviceRig(capacity=29.0, run_error=EngineError())

        result = _start(rig, standard_configuration(tablets_used=True))

        assert result == RunResult(Status.ERROR_PROGRAM, 0)

    def test_does_not_drain_after_engine_failure(self) -> None:
        rig = DeviceRig(run_error=EngineError())

        _start(rig, standard_configuration(tablets_used=False))

        assert rig.count("water_pump.drain") == 0
        assert rig.calls == ["door.closed", "door.lock", "water_pump.pour", "engine.run_program"]


class TestUndeclaredFailures:
    """Only PumpError at pour and EngineError at run_program are domain outcomes."""

    def test_engine_error_raised_by_pump_propagates(self) -> None:
        rig = DeviceRig(pour_error=EngineError("wrong device"))

        with pytest.raises(EngineError, match="wrong device"):
            _start(rig, standard_configuration(tablets_used=False))

    def test_unexpected_engine_exception_propagates(self) -> None:
        rig = DeviceRig(run_error=ZeroDivisionError("driver bug"))

        with pytest.raises(ZeroDivisionError):
            _start(rig, standard_configuration(tablets_used=False))

        assert rig.count("water_pump.drain") == 0

    def test_lock_is_released_after_propagated_exception(self) -> None:
        rig = DeviceRig(run_error=RuntimeError("driver bug"))
        dishwasher = DishWasher(*rig.devices())

        with pytest.raises(RuntimeError):
            dishwasher.start(standard_configuration(tablets_used=False))

        rig.engine.run_error = None
        results: list[RunResult] = []
        worker = threading.Thread(target=lambda: results.append(dishwasher.start(standard_configuration(tablets_used=False))))
        worker.start()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert [r.status for r in results] == [Status.SUCCESS]


class TestSerializedCycles:
    def test_concurrent_starts_do_not_interleave(self) -> None:
        rig = DeviceRig()
        dishwasher = DishWasher(*rig.devices())
        barrier = threading.Barrier(4)

        def worker() -> None:
            barrier.wait()
            dishwasher.start(standard_configuration(tablets_used=False))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert rig.calls == FULL_CYCLE_WITHOUT_TABLETS * 4

    def test_failed_cycle_does_not_affect_next(self) -> None:
        rig = DeviceRig(pour_error=PumpError())
        dishwasher = DishWasher(*rig.devices())
        assert dishwasher.start(standard_configuration(tablets_used=False)).status == Status.ERROR_PUMP

        rig.water_pump.pour_error = None
        result = dishwasher.start(standard_configuration(tablets_used=False))

        assert result.status == Status.SUCCESS
        assert rig.count("door.closed") == 2
