"""Game loop — the per-tick entry point the host calls."""

from hivemind.config import RegulatorConfig
from hivemind.logger import get_logger
from hivemind.regulator.regulator import Regulator, TickReport
from hivemind.world.base import World

log = get_logger()


class GameLoop:
    """Owns one Regulator per visible room for the lifetime of the process.

    ``tick()`` never raises: room failures are logged and the remaining rooms
    still run.
    """

    def __init__(self, world: World, config: RegulatorConfig | None = None):
        self.world = world
        self.config = config or RegulatorConfig()
        self.regulators: dict[str, Regulator] = {}
        self.last_reports: list[TickReport] = []

    def tick(self) -> None:
        tick = self.world.time
        self.last_reports = []

        try:
            rooms = self.world.rooms()
        except Exception:
            log.exception("Couldn't list rooms", tick=tick)
            return

        self.regulators = {
            room: self.regulators.get(room) or Regulator(room, self.world, self.config)
            for room in rooms
        }

        for room, regulator in self.regulators.items():
            try:
                self.last_reports.append(regulator.run_tick())
            except Exception:
                log.exception("%s: tick aborted", room, tick=tick)

        if tick % self.config.memory_cleanup_interval == self.config.memory_cleanup_offset:
            try:
                self.cleanup_memory()
            except Exception:
                log.exception("Memory cleanup failed", tick=tick)

    def cleanup_memory(self) -> int:
        """Delete memory of units that no longer exist. Returns the number removed."""
        live: set[str] = set()
        for room in self.world.rooms():
            live.update(c.name for c in self.world.my_creeps(room))
            live.update(t.id for t in self.world.towers(room))

        stale = [name for name in self.world.memory_names() if name not in live]
        for name in stale:
            self.world.delete_memory(name)

        if stale:
            log.info("Cleaned memory of %d dead units", len(stale), tick=self.world.time)
        return len(stale)

    def close(self) -> None:
        """Release all regulators; the next tick starts from persisted memory."""
        self.regulators.clear()
        self.last_reports = []
