"""
Tests for the Job, JobOffer and UnitState models and the regulator config.

These tests verify:
    1. Job priorities, ranges and target kinds per variant
    2. Accessors resolve live targets and fail loudly on the wrong variant
    3. JobOffer places only go down and never below zero
    4. UnitState transitions mirror the job into memory and restore from it
    5. Pydantic validation (rejects bad data)
"""

import json

import pytest
from pydantic import ValidationError

from hivemind.config import RegulatorConfig
from hivemind.errors import JobKindMismatch, OfferExhausted
from hivemind.models.entities import (
    ConstructionSite,
    Controller,
    Creep,
    Position,
    Source,
    Structure,
    StructureType,
)
from hivemind.models.job import Job, JobKind, TargetKind
from hivemind.models.job_offer import JobOffer
from hivemind.models.unit import MEMORY_JOB_KEY, UnitKind, UnitState
from hivemind.simulator.world import SimulatedWorld

ROOM = "W1N1"


def _source(id: str = "source-1", x: int = 10, y: int = 10) -> Source:
    return Source(id=id, room=ROOM, pos=Position(x=x, y=y))


def _road(id: str = "road-1", x: int = 20, y: int = 20, hits: int = 100) -> Structure:
    return Structure(
        id=id, room=ROOM, pos=Position(x=x, y=y),
        structure_type=StructureType.ROAD, hits=hits, hits_max=5000,
    )


# ══════════════════════════════════════════════════════════════════════
# POSITION
# ══════════════════════════════════════════════════════════════════════

class TestPosition:
    """Tests for room positions."""

    def test_range_is_chebyshev(self):
        """Diagonal steps count the same as straight ones."""
        assert Position(x=10, y=10).range_to(Position(x=13, y=11)) == 3
        assert Position(x=10, y=10).range_to(Position(x=10, y=10)) == 0

    def test_outside_room_rejected(self):
        """Coordinates must stay inside 0..49."""
        with pytest.raises(ValidationError):
            Position(x=50, y=0)


# ══════════════════════════════════════════════════════════════════════
# JOB
# ══════════════════════════════════════════════════════════════════════

class TestJob:
    """Tests for the Job tagged variant."""

    def _all_jobs(self) -> dict[JobKind, Job]:
        hostile = Creep(id="invader-1", name="invader-1", room=ROOM, pos=Position(x=1, y=1), my=False)
        friend = Creep(id="worker-1", name="worker-1", room=ROOM, pos=Position(x=2, y=2))
        site = ConstructionSite(
            id="site-1", room=ROOM, pos=Position(x=3, y=3),
            structure_type=StructureType.ROAD, progress_total=300,
        )
        controller = Controller(id="controller-1", room=ROOM, pos=Position(x=4, y=4))
        return {
            JobKind.ATTACK: Job.attack(hostile),
            JobKind.BUILD: Job.build(site),
            JobKind.HARVEST: Job.harvest(_source()),
            JobKind.HEAL: Job.heal(friend),
            JobKind.MAINTAIN: Job.maintain(_road()),
            JobKind.REPAIR: Job.repair(_road()),
            JobKind.UPGRADE: Job.upgrade(controller),
        }

    def test_factories_set_kind_and_target(self):
        """Each factory tags the job and snapshots the target id and position."""
        source = _source()
        job = Job.harvest(source)
        assert job.kind == JobKind.HARVEST
        assert job.target_id == "source-1"
        assert job.target_pos == Position(x=10, y=10)

    def test_priorities(self):
        """Attack is most urgent, harvesting least."""
        jobs = self._all_jobs()
        assert jobs[JobKind.ATTACK].priority() == 0
        assert jobs[JobKind.HARVEST].priority() == 6

        ordered = sorted(jobs.values(), key=lambda j: j.priority())
        assert [j.kind for j in ordered] == [
            JobKind.ATTACK, JobKind.HEAL, JobKind.REPAIR, JobKind.MAINTAIN,
            JobKind.BUILD, JobKind.UPGRADE, JobKind.HARVEST,
        ]

    def test_range_required_to(self):
        """Range is measured from the given point to the target."""
        job = Job.harvest(_source(x=10, y=10))
        assert job.range_required_to(Position(x=13, y=12)) == 3

    def test_interaction_ranges(self):
        jobs = self._all_jobs()
        assert jobs[JobKind.BUILD].interaction_range == 3
        assert jobs[JobKind.REPAIR].interaction_range == 3
        assert jobs[JobKind.UPGRADE].interaction_range == 3
        assert jobs[JobKind.HARVEST].interaction_range == 1
        assert jobs[JobKind.MAINTAIN].interaction_range == 1

    def test_target_kinds(self):
        jobs = self._all_jobs()
        assert jobs[JobKind.ATTACK].target_kind() == TargetKind.CREEP
        assert jobs[JobKind.HEAL].target_kind() == TargetKind.CREEP
        assert jobs[JobKind.BUILD].target_kind() == TargetKind.CONSTRUCTION_SITE
        assert jobs[JobKind.HARVEST].target_kind() == TargetKind.SOURCE
        assert jobs[JobKind.MAINTAIN].target_kind() == TargetKind.STRUCTURE
        assert jobs[JobKind.REPAIR].target_kind() == TargetKind.STRUCTURE
        assert jobs[JobKind.UPGRADE].target_kind() == TargetKind.CONTROLLER

    def test_accessor_resolves_live_target(self):
        """Accessors return the current object, not the snapshot."""
        world = SimulatedWorld()
        source = world.add(_source())
        job = Job.harvest(source)
        source.energy = 100

        resolved = job.source(world)
        assert resolved is source
        assert resolved.energy == 100

    def test_accessor_returns_none_for_vanished_target(self):
        world = SimulatedWorld()
        source = world.add(_source())
        job = Job.harvest(source)
        world.remove(source.id)

        assert job.source(world) is None

    def test_mismatched_accessor_raises(self):
        """Asking a harvest job for a structure is a programming error."""
        world = SimulatedWorld()
        job = Job.harvest(world.add(_source()))

        with pytest.raises(JobKindMismatch, match="harvest"):
            job.structure(world)
        with pytest.raises(JobKindMismatch):
            job.controller(world)

    def test_mismatch_is_a_type_error(self):
        assert issubclass(JobKindMismatch, TypeError)

    def test_job_is_immutable(self):
        job = Job.harvest(_source())
        with pytest.raises(ValidationError):
            job.kind = JobKind.BUILD

    def test_jobs_compare_by_value(self):
        assert Job.harvest(_source()) == Job.harvest(_source())
        assert Job.repair(_road()) != Job.maintain(_road())


# ══════════════════════════════════════════════════════════════════════
# JOB OFFER
# ══════════════════════════════════════════════════════════════════════

class TestJobOffer:
    """Tests for slot-limited offers."""

    def _offer(self, places: int) -> JobOffer:
        return JobOffer(job=Job.harvest(_source()), available_places=places)

    def test_take_decrements(self):
        offer = self._offer(2)
        offer.take()
        assert offer.available_places == 1
        assert offer.is_open is True

    def test_take_from_empty_offer_raises(self):
        """Places never go negative."""
        offer = self._offer(1)
        offer.take()
        assert offer.is_open is False

        with pytest.raises(OfferExhausted):
            offer.take()
        assert offer.available_places == 0

    def test_exhaust_closes_offer(self):
        offer = self._offer(5)
        offer.exhaust()
        assert offer.available_places == 0
        assert offer.is_open is False

    def test_negative_places_rejected(self):
        with pytest.raises(ValidationError):
            self._offer(-1)


# ══════════════════════════════════════════════════════════════════════
# UNIT STATE
# ══════════════════════════════════════════════════════════════════════

class TestUnitState:
    """Tests for the per-unit job state and its memory mirror."""

    def test_new_unit_is_idle(self):
        state = UnitState(name="worker-1", kind=UnitKind.CREEP)
        assert state.is_idle is True
        assert state.current_job is None

    def test_transition_writes_memory(self):
        state = UnitState(name="worker-1", kind=UnitKind.CREEP)
        memory: dict = {}
        job = Job.harvest(_source())

        state.transition(job, memory)

        assert state.current_job == job
        assert memory[MEMORY_JOB_KEY]["kind"] == "harvest"
        assert memory[MEMORY_JOB_KEY]["target_id"] == "source-1"
        json.dumps(memory)  # must be plain JSON

    def test_transition_to_idle_clears_memory(self):
        state = UnitState(name="worker-1", kind=UnitKind.CREEP)
        memory: dict = {}
        state.transition(Job.harvest(_source()), memory)

        state.transition(None, memory)

        assert state.is_idle is True
        assert MEMORY_JOB_KEY not in memory

    def test_restore_round_trip(self):
        """A unit rebuilt from memory holds the same job."""
        memory: dict = {}
        job = Job.repair(_road())
        UnitState(name="worker-1", kind=UnitKind.CREEP).transition(job, memory)

        restored = UnitState.restore("worker-1", UnitKind.CREEP, memory)
        assert restored.current_job == job

    def test_restore_without_memory_is_idle(self):
        restored = UnitState.restore("worker-1", UnitKind.CREEP, {})
        assert restored.is_idle is True

    def test_restore_corrupt_memory_is_idle(self):
        """Corrupt memory must not break the cycle; it is dropped."""
        memory = {MEMORY_JOB_KEY: {"kind": "dance", "target_id": 7}}

        restored = UnitState.restore("worker-1", UnitKind.CREEP, memory)

        assert restored.is_idle is True
        assert MEMORY_JOB_KEY not in memory

    def test_restore_non_dict_memory_is_idle(self):
        memory = {MEMORY_JOB_KEY: "harvesting"}
        assert UnitState.restore("worker-1", UnitKind.CREEP, memory).is_idle is True


# ══════════════════════════════════════════════════════════════════════
# CONFIG
# ══════════════════════════════════════════════════════════════════════

class TestRegulatorConfig:
    """Tests for configuration defaults and validation."""

    def test_defaults(self):
        config = RegulatorConfig()
        assert config.repair_multiplier == 4
        assert config.attack_places == 5
        assert config.low_lifetime_threshold == 50
        assert config.workers_take_combat_jobs is False

    def test_invalid_scan_interval(self):
        with pytest.raises(ValidationError):
            RegulatorConfig(scan_interval=0)

    def test_config_is_frozen(self):
        config = RegulatorConfig()
        with pytest.raises(ValidationError):
            config.scan_interval = 3

    def test_from_file(self, tmp_path):
        """Unspecified fields keep their defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"scan_interval": 3, "repair_multiplier": 2}))

        config = RegulatorConfig.from_file(path)

        assert config.scan_interval == 3
        assert config.repair_multiplier == 2
        assert config.attack_places == 5
