"""Detection and naming of the GNSS hardware target a device carries."""

import enum
import os
import time
from pathlib import Path

from locutils.log_util import get_name_from_val, loc_logger

__all__ = [
    "GnssTarget",
    "SscType",
    "TargetDetector",
    "target_set",
    "get_target_gnss_type",
    "get_target_name",
    "TARGET_DEFAULT",
    "TARGET_MDM",
    "TARGET_APQ_SA",
    "TARGET_MPQ",
    "TARGET_MSM_NO_SSC",
    "TARGET_QCA1530",
    "TARGET_UNKNOWN",
    "TARGET_UNSET",
]


class GnssTarget(enum.IntEnum):
    """Which GNSS engine the target uses."""

    NONE = 0
    MSM = 1
    GSS = 2
    MDM = 3
    QCA1530 = 4
    UNKNOWN = 5


class SscType(enum.IntEnum):
    """Whether the target has a sensor subsystem core."""

    NO_SSC = 0
    HAS_SSC = 1


def target_set(gnss, ssc):
    """Combine a GNSS type and an SSC flag into a target code."""
    return (int(gnss) << 1) | int(ssc)


def get_target_gnss_type(target):
    """Return the GNSS type index held in a target code."""
    return (int(target) & 0xFFFFFFFF) >> 1


TARGET_DEFAULT = target_set(GnssTarget.MSM, SscType.HAS_SSC)
TARGET_MDM = target_set(GnssTarget.MDM, SscType.HAS_SSC)
TARGET_APQ_SA = target_set(GnssTarget.GSS, SscType.NO_SSC)
TARGET_MPQ = target_set(GnssTarget.NONE, SscType.NO_SSC)
TARGET_MSM_NO_SSC = target_set(GnssTarget.MSM, SscType.NO_SSC)
TARGET_QCA1530 = target_set(GnssTarget.QCA1530, SscType.NO_SSC)
TARGET_UNKNOWN = target_set(GnssTarget.UNKNOWN, SscType.NO_SSC)
# Detection has not produced a result (yet).
TARGET_UNSET = 0xFFFFFFFF

_TARGET_NAMES = {f"GNSS_{member.name}": member.value for member in GnssTarget}


def get_target_name(target):
    """Describe a target code, e.g. ``" GNSS_MDM with SSC"``."""
    target = int(target) & 0xFFFFFFFF
    index = get_target_gnss_type(target)
    if index not in _TARGET_NAMES.values():
        index = GnssTarget.UNKNOWN
    name = get_name_from_val(_TARGET_NAMES, index)
    if target & SscType.HAS_SSC == SscType.HAS_SSC:
        return f" {name} with SSC"
    return f" {name}  without SSC"


LINE_LEN = 100
QCA1530_DETECT_TIMEOUT = 30
QCA1530_PROPERTY = "persist.qca1530"
QCA1530_DETECT_PRESENT = "yes"
QCA1530_DETECT_PROGRESS = "detect"

HW_PLATFORM = "/sys/devices/soc0/hw_platform"
SOC_ID = "/sys/devices/soc0/soc_id"
HW_PLATFORM_DEP = "/sys/devices/system/soc/soc0/hw_platform"
SOC_ID_DEP = "/sys/devices/system/soc/soc0/id"
MDM_DEVICE = "/dev/mdm"

MPQ8064_ID_1 = "130"
MSM8930_ID_1 = "142"
MSM8930_ID_2 = "116"

_LINE_ENDS = ("", "\0", "\n", "\r")


def _matches(line, ident):
    """Tell whether ``line`` holds exactly ``ident`` up to its end of line."""
    return line.startswith(ident) and line[len(ident):len(ident) + 1] in _LINE_ENDS


def _no_properties(name, default=None):
    return default


class TargetDetector:
    """Works out the device's target code from system properties and sysfs files.

    ``get_property(name, default)`` looks up a system property, ``root`` is
    the directory the absolute sysfs paths are resolved under, and ``sleep``
    waits while the QCA1530 detection is still in progress. A detected
    target is remembered for later calls.
    """

    def __init__(self, get_property=None, root="/", sleep=time.sleep):
        self._get_property = get_property or _no_properties
        self._root = Path(root)
        self._sleep = sleep
        self._target = TARGET_UNSET

    @property
    def target(self):
        """The remembered target code, or ``TARGET_UNSET``."""
        return self._target

    def _path(self, path):
        return self._root / path.lstrip("/")

    def _read_a_line(self, path):
        """Return the first line of a file (at most ``LINE_LEN - 1`` chars), or None."""
        try:
            with open(self._path(path), "rb") as fp:
                raw = fp.readline(LINE_LEN - 1)
        except OSError as exc:
            loc_logger.error("open failed: %s: %s", path, exc.strerror)
            return None
        line = raw.decode("latin-1")
        loc_logger.debug("cat %s: %s", path, line)
        return line

    def _read_preferred(self, path, fallback):
        chosen = path if os.path.exists(self._path(path)) else fallback
        return self._read_a_line(chosen) or ""

    def is_qca1530(self):
        """Tell whether a QCA1530 chip is present, waiting while it is being detected."""
        result = False
        for _ in range(QCA1530_DETECT_TIMEOUT):
            value = self._get_property(QCA1530_PROPERTY, None) or ""
            loc_logger.verbose("qca1530: property %s is set to %s", QCA1530_PROPERTY, value)
            if value == QCA1530_DETECT_PRESENT:
                result = True
                break
            if value == QCA1530_DETECT_PROGRESS:
                loc_logger.verbose("qca1530: SoC detection is in progress.")
                self._sleep(1)
                continue
            break
        loc_logger.debug("qca1530: detected=%s", "true" if result else "false")
        return result

    def _classify(self):
        baseband = self._get_property("ro.baseband", "") or ""
        hw_platform = self._read_preferred(HW_PLATFORM, HW_PLATFORM_DEP)
        soc_id = self._read_preferred(SOC_ID, SOC_ID_DEP)

        if baseband.startswith("apq"):
            return TARGET_MPQ if _matches(soc_id, MPQ8064_ID_1) else TARGET_APQ_SA
        if any(_matches(hw_platform, name) for name in ("Liquid", "Surf", "MTP")):
            if self._read_a_line(MDM_DEVICE) is not None:
                return TARGET_MDM
            return TARGET_UNSET
        if _matches(soc_id, MSM8930_ID_1) or _matches(soc_id, MSM8930_ID_2):
            return TARGET_MSM_NO_SSC
        return TARGET_UNKNOWN

    def detect(self):
        """Return the device's target code, detecting it on first use."""
        if self._target != TARGET_UNSET:
            return self._target
        self._target = TARGET_QCA1530 if self.is_qca1530() else self._classify()
        loc_logger.debug("HAL: %s returned %d", "detect", self._target)
        return self._target