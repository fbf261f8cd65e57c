"""
Pydantic model for the user profile that drives plan generation.
Validated once at the API boundary; immutable afterwards.
"""
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from fitplan.models.validation import ValidationResult, validate_model


Gender = Literal["Male", "Female", "Other"]
FitnessGoal = Literal["Weight Loss", "Muscle Gain", "Maintenance", "Endurance", "Flexibility"]
FitnessLevel = Literal["Beginner", "Intermediate", "Advanced"]
WorkoutLocation = Literal["Home", "Gym", "Outdoor"]
DietaryPreference = Literal["Vegetarian", "Non-Vegetarian", "Vegan", "Keto", "Paleo"]
StressLevel = Literal["Low", "Medium", "High"]


class UserProfile(BaseModel):
    """Biometrics and preferences collected by the intake form."""

    name: str = Field(..., min_length=2, description="Display name")
    age: int = Field(..., ge=13, le=100)
    gender: Gender
    height: float = Field(..., ge=100, le=250, description="Height in cm")
    weight: float = Field(..., ge=30, le=300, description="Weight in kg")
    fitnessGoal: FitnessGoal
    fitnessLevel: FitnessLevel
    workoutLocation: WorkoutLocation
    dietaryPreference: DietaryPreference
    medicalHistory: Optional[str] = Field(None, description="Free-text medical notes")
    stressLevel: Optional[StressLevel] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Priya",
                "age": 28,
                "gender": "Female",
                "height": 165,
                "weight": 60,
                "fitnessGoal": "Weight Loss",
                "fitnessLevel": "Beginner",
                "workoutLocation": "Home",
                "dietaryPreference": "Vegetarian",
                "stressLevel": "Medium"
            }
        }


def validate_user_profile(data: Any) -> ValidationResult[UserProfile]:
    """Check untrusted form input; returns field violations instead of raising."""
    return validate_model(UserProfile, data)
