from .mounts import find_partition
from .stats import NOT_FOUND_CODE, VolumeStats, probe

__all__ = [
    "NOT_FOUND_CODE",
    "VolumeStats",
    "find_partition",
    "probe",
]
