from hivemind.units.base import Outcome, Turn, UnitController
from hivemind.units.creep import CreepController
from hivemind.units.tower import TowerController

__all__ = ["Outcome", "Turn", "UnitController", "CreepController", "TowerController"]
