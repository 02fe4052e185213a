from hivemind.simulator.world import SimulatedWorld
from hivemind.simulator.engine import SimulationEngine
from hivemind.simulator.generator import ScenarioGenerator

__all__ = ["SimulatedWorld", "SimulationEngine", "ScenarioGenerator"]
