"""
Birth input for a chart.

Validation happens at construction, so a BirthInput that exists is
always a real date inside the calendar table range with a resolvable
hour and gender.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Union

from zwds.errors import InvalidBirthInputError, InvalidDateError, OutOfRangeError
from zwds.lunar import FIRST_TABLE_YEAR, LAST_TABLE_YEAR
from zwds.stems import EarthlyBranch, hour_branch


class Gender(Enum):
    MALE = "M"
    FEMALE = "F"

    @property
    def chinese(self) -> str:
        return "男" if self is Gender.MALE else "女"

    @classmethod
    def parse(cls, value: Union["Gender", str]) -> "Gender":
        """Accept "M"/"F", "male"/"female" or 男/女."""
        if isinstance(value, Gender):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ("m", "male", "男"):
                return cls.MALE
            if text in ("f", "female", "女"):
                return cls.FEMALE
        raise InvalidBirthInputError(f"Gender must be 'M' or 'F', got {value!r}")


@dataclass(frozen=True)
class BirthInput:
    year: int
    month: int
    day: int
    hour: Union[int, str]  # 0-23 clock hour or branch label
    gender: Gender
    name: str = ""
    branch: EarthlyBranch = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for label, value in (("year", self.year), ("month", self.month), ("day", self.day)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidBirthInputError(f"Birth {label} must be an integer, got {value!r}")
        if not FIRST_TABLE_YEAR <= self.year <= LAST_TABLE_YEAR:
            raise OutOfRangeError(
                f"Birth year {self.year} is outside {FIRST_TABLE_YEAR}-{LAST_TABLE_YEAR}"
            )
        try:
            date(self.year, self.month, self.day)
        except ValueError as e:
            raise InvalidDateError(f"Invalid birth date {self.year}-{self.month}-{self.day}: {e}") from e

        object.__setattr__(self, "gender", Gender.parse(self.gender))
        object.__setattr__(self, "branch", hour_branch(self.hour))

    @property
    def solar_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_dict(self):
        return {
            "name": self.name,
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "hour_branch": self.branch.chinese,
            "gender": self.gender.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BirthInput":
        return cls(
            year=data["year"],
            month=data["month"],
            day=data["day"],
            hour=data["hour"],
            gender=data["gender"],
            name=data.get("name", ""),
        )
