"""Game constants — job priorities, interaction ranges and room geometry."""

# Scheduling priority per job kind (0 = most important)
PRIORITY_ATTACK = 0
PRIORITY_HEALING = 1
PRIORITY_REPAIRING = 2
PRIORITY_MAINTAINING = 3
PRIORITY_BUILDING = 4
PRIORITY_UPGRADING = 5
PRIORITY_HARVESTING = 6

# Interaction ranges (Chebyshev distance)
RANGE_ATTACK = 1
RANGE_BUILD = 3
RANGE_HARVEST = 1
RANGE_HEAL = 1
RANGE_REPAIR = 3
RANGE_TRANSFER = 1
RANGE_UPGRADE_CONTROLLER = 3

# Room geometry
ROOM_X = 50
ROOM_Y = 50

# Per-action amounts used by the simulated world
HARVEST_POWER = 2
BUILD_POWER = 5
REPAIR_POWER = 100
UPGRADE_POWER = 1
ATTACK_POWER = 30
HEAL_POWER = 12
TOWER_ATTACK_POWER = 600
TOWER_REPAIR_POWER = 800
TOWER_ENERGY_COST = 10
ENERGY_REGEN_TIME = 300
CREEP_LIFE_TIME = 1500
