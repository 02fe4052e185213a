"""
Tests for the creep and tower assignment policies' shared selection rules.

These tests verify:
    1. Empty creeps only harvest; full or expiring creeps never harvest
    2. Combat jobs stay with towers unless configured otherwise
    3. The repair limit is energy capacity × multiplier, strictly
    4. Selection minimises priority × range with pool-order tie-breaking
    5. Claiming decrements places and exhausts satisfiable maintain offers
"""

from hivemind.config import RegulatorConfig
from hivemind.models.entities import (
    ConstructionSite,
    Controller,
    Creep,
    Position,
    Source,
    Structure,
    StructureType,
)
from hivemind.models.job import Job, JobKind
from hivemind.models.job_offer import JobOffer
from hivemind.schedulers.base import AssignmentPolicy
from hivemind.schedulers.creep import CreepPolicy
from hivemind.simulator.world import SimulatedWorld

ROOM = "W1N1"


def _make_world() -> SimulatedWorld:
    world = SimulatedWorld()
    world.add_room(ROOM)
    return world


def _make_creep(energy: int = 0, x: int = 10, y: int = 10, **kwargs) -> Creep:
    return Creep(
        id="worker-1", name="worker-1", room=ROOM, pos=Position(x=x, y=y),
        energy=energy, energy_capacity=50, **kwargs,
    )


def _make_offer(job: Job, places: int = 1) -> JobOffer:
    return JobOffer(job=job, available_places=places)


# ══════════════════════════════════════════════════════════════════════
# ELIGIBILITY
# ══════════════════════════════════════════════════════════════════════

class TestCreepEligibility:
    """Tests for which offers a creep may take."""

    def test_empty_creep_prefers_harvest_over_upgrade(self):
        """An empty creep can't upgrade, so it goes for the source."""
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=12, y=10)))
        controller = world.add(Controller(id="controller-1", room=ROOM, pos=Position(x=11, y=10)))
        offers = [
            _make_offer(Job.harvest(source), 9),
            _make_offer(Job.upgrade(controller), 49),
        ]

        chosen = CreepPolicy(world).select(offers, _make_creep(energy=0))

        assert chosen is offers[0]

    def test_full_creep_never_harvests(self):
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        policy = CreepPolicy(world)

        offer = _make_offer(Job.harvest(source), 9)
        assert policy.eligible(offer, _make_creep(energy=50)) is False
        assert policy.eligible(offer, _make_creep(energy=49)) is True

    def test_expiring_creep_never_harvests(self):
        """Below the lifetime threshold (50) a creep stops harvesting."""
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        policy = CreepPolicy(world)
        offer = _make_offer(Job.harvest(source), 9)

        assert policy.eligible(offer, _make_creep(ticks_to_live=49)) is False
        assert policy.eligible(offer, _make_creep(ticks_to_live=50)) is True

    def test_unknown_lifetime_is_not_expiring(self):
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        offer = _make_offer(Job.harvest(source), 9)

        assert CreepPolicy(world).eligible(offer, _make_creep(ticks_to_live=None)) is True

    def test_empty_creep_only_harvests(self):
        world = _make_world()
        site = world.add(ConstructionSite(
            id="site-1", room=ROOM, pos=Position(x=12, y=12),
            structure_type=StructureType.ROAD, progress_total=300,
        ))
        controller = world.add(Controller(id="controller-1", room=ROOM, pos=Position(x=14, y=14)))
        policy = CreepPolicy(world)
        creep = _make_creep(energy=0)

        assert policy.eligible(_make_offer(Job.build(site)), creep) is False
        assert policy.eligible(_make_offer(Job.upgrade(controller)), creep) is False

    def test_combat_jobs_left_to_towers_by_default(self):
        world = _make_world()
        hostile = world.add(Creep(
            id="invader-1", name="invader-1", room=ROOM, pos=Position(x=11, y=11), my=False,
        ))
        offer = _make_offer(Job.attack(hostile), 5)
        creep = _make_creep(energy=50)

        assert CreepPolicy(world).eligible(offer, creep) is False

        combat = RegulatorConfig(workers_take_combat_jobs=True)
        assert CreepPolicy(world, combat).eligible(offer, creep) is True

    def test_repair_limit_is_strict(self):
        """Energy capacity 50 × multiplier 4 = 200."""
        world = _make_world()
        weak = world.add(Structure(
            id="road-1", room=ROOM, pos=Position(x=12, y=12),
            structure_type=StructureType.ROAD, hits=199, hits_max=5000,
        ))
        sturdy = world.add(Structure(
            id="road-2", room=ROOM, pos=Position(x=13, y=13),
            structure_type=StructureType.ROAD, hits=200, hits_max=5000,
        ))
        policy = CreepPolicy(world)
        creep = _make_creep(energy=50)

        assert policy.eligible(_make_offer(Job.repair(weak)), creep) is True
        assert policy.eligible(_make_offer(Job.repair(sturdy)), creep) is False

    def test_repair_of_vanished_target_is_ineligible(self):
        world = _make_world()
        road = world.add(Structure(
            id="road-1", room=ROOM, pos=Position(x=12, y=12),
            structure_type=StructureType.ROAD, hits=10, hits_max=5000,
        ))
        offer = _make_offer(Job.repair(road))
        world.remove(road.id)

        assert CreepPolicy(world).eligible(offer, _make_creep(energy=50)) is False


# ══════════════════════════════════════════════════════════════════════
# SELECTION
# ══════════════════════════════════════════════════════════════════════

class TestSelection:
    """Tests for scoring and tie-breaking."""

    def test_score_is_priority_times_range(self):
        controller = Controller(id="controller-1", room=ROOM, pos=Position(x=13, y=10))
        offer = _make_offer(Job.upgrade(controller))
        assert AssignmentPolicy.score(offer, Position(x=10, y=10)) == 15

    def test_closer_low_priority_beats_far_high_priority(self):
        """Upgrade next door (5 × 1) beats a build three tiles away (4 × 3)."""
        world = _make_world()
        site = world.add(ConstructionSite(
            id="site-1", room=ROOM, pos=Position(x=13, y=10),
            structure_type=StructureType.ROAD, progress_total=300,
        ))
        controller = world.add(Controller(id="controller-1", room=ROOM, pos=Position(x=11, y=10)))
        offers = [_make_offer(Job.build(site), 48), _make_offer(Job.upgrade(controller), 49)]

        chosen = CreepPolicy(world).select(offers, _make_creep(energy=50))

        assert chosen.job.kind == JobKind.UPGRADE

    def test_standing_on_target_scores_zero(self):
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=20, y=20)))
        controller = world.add(Controller(id="controller-1", room=ROOM, pos=Position(x=10, y=10)))
        offers = [_make_offer(Job.harvest(source), 9), _make_offer(Job.upgrade(controller), 49)]

        chosen = CreepPolicy(world).select(offers, _make_creep(energy=25))

        assert chosen.job.kind == JobKind.UPGRADE

    def test_ties_go_to_pool_order(self):
        world = _make_world()
        first = world.add(Source(id="source-1", room=ROOM, pos=Position(x=12, y=10)))
        second = world.add(Source(id="source-2", room=ROOM, pos=Position(x=8, y=10)))
        offers = [_make_offer(Job.harvest(first), 9), _make_offer(Job.harvest(second), 9)]
        policy = CreepPolicy(world)

        assert policy.select(offers, _make_creep()) is offers[0]
        assert policy.select(list(reversed(offers)), _make_creep()) is offers[1]

    def test_closed_offers_are_skipped(self):
        world = _make_world()
        near = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        far = world.add(Source(id="source-2", room=ROOM, pos=Position(x=30, y=30)))
        offers = [_make_offer(Job.harvest(near), 0), _make_offer(Job.harvest(far), 9)]

        assert CreepPolicy(world).select(offers, _make_creep()) is offers[1]

    def test_nothing_eligible_returns_none(self):
        world = _make_world()
        controller = world.add(Controller(id="controller-1", room=ROOM, pos=Position(x=11, y=10)))
        offers = [_make_offer(Job.upgrade(controller), 49)]

        assert CreepPolicy(world).select(offers, _make_creep(energy=0)) is None
        assert CreepPolicy(world).select([], _make_creep()) is None


# ══════════════════════════════════════════════════════════════════════
# CLAIM
# ══════════════════════════════════════════════════════════════════════

class TestClaim:
    """Tests for taking places on the winning offer."""

    def _extension(self, world: SimulatedWorld, energy: int) -> Structure:
        return world.add(Structure(
            id="extension-1", room=ROOM, pos=Position(x=11, y=10),
            structure_type=StructureType.EXTENSION, hits=1000, hits_max=1000,
            energy=energy, energy_capacity=50,
        ))

    def test_claim_decrements_places(self):
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        offer = _make_offer(Job.harvest(source), 3)

        CreepPolicy(world).claim(offer, _make_creep())

        assert offer.available_places == 2

    def test_maintain_exhausted_when_one_creep_fills_target(self):
        """40 free capacity, 50 carried: nobody else needs to come."""
        world = _make_world()
        extension = self._extension(world, energy=10)
        offer = _make_offer(Job.maintain(extension), 9)

        CreepPolicy(world).claim(offer, _make_creep(energy=50))

        assert offer.available_places == 0
        assert offer.is_open is False

    def test_maintain_stays_open_when_creep_cannot_fill(self):
        world = _make_world()
        extension = self._extension(world, energy=10)
        offer = _make_offer(Job.maintain(extension), 9)

        CreepPolicy(world).claim(offer, _make_creep(energy=30))

        assert offer.available_places == 8

    def test_places_only_go_down(self):
        """Repeated claims walk the counter down to zero and then stop matching."""
        world = _make_world()
        source = world.add(Source(id="source-1", room=ROOM, pos=Position(x=11, y=10)))
        offers = [_make_offer(Job.harvest(source), 2)]
        policy = CreepPolicy(world)

        seen = []
        for _ in range(4):
            chosen = policy.select(offers, _make_creep())
            if chosen is not None:
                policy.claim(chosen, _make_creep())
            seen.append(offers[0].available_places)

        assert seen == [1, 0, 0, 0]
