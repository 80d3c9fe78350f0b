"""
Body measurements supplied by the user alongside the face scan.
"""

from dataclasses import dataclass
from enum import Enum

import config as cfg


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BMICategory(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


BMI_CATEGORY_COLORS = {
    BMICategory.UNDERWEIGHT: "yellow",
    BMICategory.NORMAL: "green",
    BMICategory.OVERWEIGHT: "orange",
    BMICategory.OBESE: "red",
}


@dataclass(frozen=True)
class BodyStats:
    height_cm: float
    weight_kg: float
    waist_cm: float
    shoulder_cm: float
    gender: Gender = Gender.MALE
    age: int | None = None
    neck_cm: float | None = None

    def __post_init__(self):
        # Accept plain strings ("male", "Female") from CLI/JSON callers
        if not isinstance(self.gender, Gender):
            object.__setattr__(self, "gender", Gender(str(self.gender).lower()))

    @property
    def bmi(self) -> float:
        """kg / m^2; 0 when height is missing."""
        height_m = self.height_cm / 100.0
        if height_m <= 0:
            return 0.0
        return self.weight_kg / (height_m * height_m)

    @property
    def waist_to_shoulder_ratio(self) -> float:
        if self.shoulder_cm <= 0:
            return 0.0
        return self.waist_cm / self.shoulder_cm

    @property
    def bmi_category(self) -> BMICategory:
        bmi = self.bmi
        if bmi < cfg.BMI_UNDERWEIGHT:
            return BMICategory.UNDERWEIGHT
        if bmi < cfg.BMI_OVERWEIGHT:
            return BMICategory.NORMAL
        if bmi < cfg.BMI_OBESE:
            return BMICategory.OVERWEIGHT
        return BMICategory.OBESE
