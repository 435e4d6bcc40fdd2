"""Super Star Trek simulation engine package."""

from .config import (
    NavEnergyModel,
    PRESETS,
    Ruleset,
    load_ruleset,
    override_ruleset,
    load_seed,
)

from .damage import (
    DEVICE_NAMES,
    DamageModel,
    DamageReportItem,
    Device,
)

from .dispatcher import (
    # Pending prompts
    AwaitingComputerFunction,
    AwaitingCoordA,
    AwaitingCoordB,
    AwaitingCourse,
    AwaitingPhaserUnits,
    AwaitingRepairConfirm,
    AwaitingShieldUnits,
    AwaitingTorpedoCourse,
    AwaitingWarp,
    # Dispatcher
    CommandDispatcher,
)

from .engine import (
    # State types
    Condition,
    GameOutcome,
    GameStatus,
    ShipState,
    # Snapshots
    MissionStats,
    SectorData,
    SectorEntity,
    StarbaseAttackInfo,
    # Game
    StarTrekGame,
)

from .events import (
    EventLog,
    LogLine,
)

from .galaxy import (
    GalaxyGenerator,
    Klingon,
    Quadrant,
    QuadrantPopulator,
    Star,
    Starbase,
    region_name,
)

__all__ = [
    # Config module
    "NavEnergyModel",
    "PRESETS",
    "Ruleset",
    "load_ruleset",
    "override_ruleset",
    "load_seed",
    # Damage module
    "DEVICE_NAMES",
    "DamageModel",
    "DamageReportItem",
    "Device",
    # Dispatcher module - Pending prompts
    "AwaitingComputerFunction",
    "AwaitingCoordA",
    "AwaitingCoordB",
    "AwaitingCourse",
    "AwaitingPhaserUnits",
    "AwaitingRepairConfirm",
    "AwaitingShieldUnits",
    "AwaitingTorpedoCourse",
    "AwaitingWarp",
    # Dispatcher module - Dispatcher
    "CommandDispatcher",
    # Engine module - State types
    "Condition",
    "GameOutcome",
    "GameStatus",
    "ShipState",
    # Engine module - Snapshots
    "MissionStats",
    "SectorData",
    "SectorEntity",
    "StarbaseAttackInfo",
    # Engine module - Game
    "StarTrekGame",
    # Events module
    "EventLog",
    "LogLine",
    # Galaxy module
    "GalaxyGenerator",
    "Klingon",
    "Quadrant",
    "QuadrantPopulator",
    "Star",
    "Starbase",
    "region_name",
]
