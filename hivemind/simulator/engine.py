"""Simulation Engine — runs the game loop against a simulated world tick by tick."""

from hivemind.config import RegulatorConfig
from hivemind.game_loop import GameLoop
from hivemind.metrics.collector import MetricsCollector
from hivemind.simulator.world import SimulatedWorld


class SimulationEngine:
    """Drives GameLoop.tick() then SimulatedWorld.advance() for a fixed number of ticks."""

    def __init__(
        self,
        world: SimulatedWorld,
        config: RegulatorConfig | None = None,
        ticks: int = 500,
    ):
        self.world = world
        self.config = config or RegulatorConfig()
        self.ticks = ticks
        self.game_loop = GameLoop(world, self.config)
        self._metrics = MetricsCollector()

    def run(self) -> MetricsCollector:
        """Run the simulation and return the populated metrics collector."""
        for _ in range(self.ticks):
            self.step()

        self._metrics.calculate(self.world)
        self.game_loop.close()
        return self._metrics

    def step(self) -> None:
        """One tick: decide and act, then let the world move on."""
        self.game_loop.tick()
        self._metrics.record(self.game_loop.last_reports)
        self.world.advance()
