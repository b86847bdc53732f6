from enum import Enum


class CabrilloMode(Enum):
    """
    Mode codes used in Cabrillo QSO lines, with a human readable label
    """

    PHONE = "PH"
    CW = "CW"
    DIGITAL = "DG"
    RTTY = "RY"
    # Unknown or contest specific
    OTHER = "??"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_code(cls, code: str) -> "CabrilloMode":
        try:
            return cls(code.strip().upper())
        except ValueError:
            return cls.OTHER


_LABELS = {
    CabrilloMode.PHONE: "Phone",
    CabrilloMode.CW: "CW",
    CabrilloMode.DIGITAL: "Digital",
    CabrilloMode.RTTY: "RTTY",
    CabrilloMode.OTHER: "UNKNOWN",
}
