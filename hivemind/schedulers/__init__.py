from hivemind.schedulers.base import AssignmentPolicy
from hivemind.schedulers.creep import CreepPolicy
from hivemind.schedulers.tower import TowerPolicy

__all__ = ["AssignmentPolicy", "CreepPolicy", "TowerPolicy"]
