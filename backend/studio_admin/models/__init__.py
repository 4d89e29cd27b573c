from .generated import (
    Base,
    Machines,
    Members,
    StudioSettings,
    TrainingSessionMembers,
    TrainingSessions,
)

__all__ = [
    "Base",
    "Machines",
    "Members",
    "StudioSettings",
    "TrainingSessionMembers",
    "TrainingSessions",
]
