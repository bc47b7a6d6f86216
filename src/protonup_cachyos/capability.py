"""CPU microarchitecture level detection.

Picks which upstream build variant the host can run. Inspection problems are
never errors: anything we cannot read is treated as a baseline CPU.
"""

import logging
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")

# x86-64-v3 instruction set requirements checked by the upstream builds
V3_REQUIRED_FLAGS = frozenset({"avx2", "bmi1", "bmi2", "fma"})


class MicroarchTag(StrEnum):
    """Build variant label; the value is the suffix used in release asset names."""

    BASELINE = "x86_64"
    V3 = "x86_64_v3"

    @property
    def asset_suffix(self) -> str:
        """Suffix a matching asset download URL must end with."""
        return f"{self.value}.tar.xz"


def _parse_flags(cpuinfo: str) -> set[str] | None:
    """Return the flag tokens of the first ``flags`` line, or None if absent."""
    for line in cpuinfo.splitlines():
        if not line.startswith("flags"):
            continue
        _, _, value = line.partition(":")
        return set(value.split())
    return None


def detect_microarch(cpuinfo_path: Path = CPUINFO_PATH) -> MicroarchTag:
    """
    Detect the microarchitecture level of the host CPU.

    Args:
        cpuinfo_path: File with the kernel's CPU feature report

    Returns:
        MicroarchTag.V3 if AVX2, BMI1, BMI2 and FMA are all reported,
        MicroarchTag.BASELINE otherwise (including when the report is unreadable)
    """
    try:
        cpuinfo = cpuinfo_path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {cpuinfo_path}: {e}")
        return MicroarchTag.BASELINE

    flags = _parse_flags(cpuinfo)
    if flags is None:
        logger.debug(f"No flags line in {cpuinfo_path}")
        return MicroarchTag.BASELINE

    missing = V3_REQUIRED_FLAGS - flags
    if missing:
        logger.debug(f"CPU lacks {sorted(missing)}, using baseline build")
        return MicroarchTag.BASELINE

    return MicroarchTag.V3
