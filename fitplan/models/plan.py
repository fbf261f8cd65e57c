"""
Pydantic models for the generated fitness plan.

These describe the shape the generator is asked to produce. Only the
skeleton is enforced: the day list, the three mandatory meals, the diet
totals, tips and motivation. Per-exercise and per-meal details are trusted
as given, and unknown members are kept at every level.
"""
from typing import Any, Optional
from pydantic import BaseModel

from fitplan.models.user import UserProfile
from fitplan.models.validation import ValidationResult, validate_model


class Exercise(BaseModel):
    """Single exercise in a workout day."""

    name: str
    sets: Optional[int] = None
    reps: Optional[str] = None  # "10-12" or "30 seconds"
    rest: Optional[str] = None
    equipment: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        extra = "allow"
        coerce_numbers_to_str = True  # a bare 12 for reps is still a valid plan


class DayWorkout(BaseModel):
    """One day of the weekly workout."""

    day: str
    focus: Optional[str] = None
    warmup: Optional[str] = None
    exercises: list[Exercise] = []
    cooldown: Optional[str] = None

    class Config:
        extra = "allow"


class WorkoutPlan(BaseModel):
    days: list[DayWorkout]

    class Config:
        extra = "allow"


class Meal(BaseModel):
    """Single meal slot in the diet plan."""

    name: str
    time: Optional[str] = None
    items: list[str] = []
    calories: Optional[int | float] = None
    protein: Optional[int | float] = None
    carbs: Optional[int | float] = None
    fats: Optional[int | float] = None

    class Config:
        extra = "allow"


class DietPlan(BaseModel):
    """
    Daily diet plan.

    The totals are whatever the generator supplied; they are not recomputed
    from, or checked against, the per-meal values.
    """

    breakfast: Meal
    midMorningSnack: Optional[Meal] = None
    lunch: Meal
    eveningSnack: Optional[Meal] = None
    dinner: Meal
    totalCalories: int | float
    totalProtein: int | float
    totalCarbs: int | float
    totalFats: int | float

    class Config:
        extra = "allow"

    def meals(self) -> list[tuple[str, Meal]]:
        """Present meal slots in serving order."""
        slots = [
            ("breakfast", self.breakfast),
            ("midMorningSnack", self.midMorningSnack),
            ("lunch", self.lunch),
            ("eveningSnack", self.eveningSnack),
            ("dinner", self.dinner),
        ]
        return [(key, meal) for key, meal in slots if meal is not None]


class FitnessPlan(BaseModel):
    """Generated plan. Extra members emitted by the model are kept as-is."""

    workoutPlan: WorkoutPlan
    dietPlan: DietPlan
    tips: list[str]
    motivation: str
    createdAt: Optional[str] = None

    class Config:
        extra = "allow"


class SavedPlan(FitnessPlan):
    """Persisted snapshot of a plan, tagged with an id and save time."""

    id: str
    userData: UserProfile


def validate_plan_structure(data: Any) -> ValidationResult[FitnessPlan]:
    """Check the shape of parsed generator output without raising."""
    return validate_model(FitnessPlan, data)
