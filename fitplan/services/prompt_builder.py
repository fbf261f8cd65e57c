"""
Prompt construction for plan and tagline generation.

Prompts are pure functions of their input: the same profile always renders
the same text.
"""
import json

from fitplan.models.user import UserProfile


# Exemplar output; the generator is asked to reproduce exactly this shape.
PLAN_EXEMPLAR = {
    "workoutPlan": {
        "days": [
            {
                "day": "Day 1",
                "focus": "Chest and Triceps",
                "warmup": "5 minutes cardio + dynamic stretching",
                "exercises": [
                    {
                        "name": "Push-ups",
                        "sets": 3,
                        "reps": "10-12",
                        "rest": "60 seconds",
                        "equipment": "None",
                        "notes": "Keep core engaged"
                    }
                ],
                "cooldown": "5 minutes stretching"
            }
        ]
    },
    "dietPlan": {
        "breakfast": {
            "name": "Protein-Rich Breakfast",
            "time": "7:00 AM",
            "items": ["Oatmeal with fruits", "2 boiled eggs", "Green tea"],
            "calories": 400,
            "protein": 25,
            "carbs": 45,
            "fats": 12
        },
        "midMorningSnack": {
            "name": "Mid-Morning Snack",
            "time": "10:00 AM",
            "items": ["Greek yogurt", "Handful of almonds"],
            "calories": 200,
            "protein": 15,
            "carbs": 12,
            "fats": 10
        },
        "lunch": {
            "name": "Balanced Lunch",
            "time": "1:00 PM",
            "items": ["Grilled chicken breast", "Brown rice", "Mixed vegetables"],
            "calories": 500,
            "protein": 40,
            "carbs": 50,
            "fats": 15
        },
        "eveningSnack": {
            "name": "Evening Snack",
            "time": "4:00 PM",
            "items": ["Protein shake", "Banana"],
            "calories": 250,
            "protein": 20,
            "carbs": 30,
            "fats": 5
        },
        "dinner": {
            "name": "Light Dinner",
            "time": "7:00 PM",
            "items": ["Grilled fish", "Quinoa", "Steamed broccoli"],
            "calories": 450,
            "protein": 35,
            "carbs": 40,
            "fats": 15
        },
        "totalCalories": 1800,
        "totalProtein": 135,
        "totalCarbs": 177,
        "totalFats": 57
    },
    "tips": [
        "Stay hydrated - drink at least 8-10 glasses of water daily",
        "Get 7-8 hours of quality sleep each night",
        "Focus on proper form to prevent injuries",
        "Listen to your body and rest when needed",
        "Track your progress weekly"
    ],
    "motivation": "Every workout brings you one step closer to your goals. Stay consistent, stay focused, and believe in yourself!"
}


TAGLINE_PROMPT = """Generate a single, powerful motivational quote about fitness, health, or personal growth.
Make it inspiring and uplifting. Return only the quote text, nothing else."""


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """Body-mass index rounded to one decimal place."""
    height_m = height_cm / 100
    return round(weight_kg / (height_m ** 2), 1)


def build_fitness_plan_prompt(profile: UserProfile) -> str:
    """
    Render a validated profile into the plan-generation instruction.

    Args:
        profile: Validated user profile

    Returns:
        Prompt text with the profile, BMI, exemplar JSON and directives
    """
    bmi = calculate_bmi(profile.height, profile.weight)

    profile_desc = (
        f"Name: {profile.name}, Age: {profile.age}, Gender: {profile.gender}\n"
        f"Height: {profile.height:g}cm, Weight: {profile.weight:g}kg, BMI: {bmi:.1f}\n"
        f"Goal: {profile.fitnessGoal}, Level: {profile.fitnessLevel}\n"
        f"Location: {profile.workoutLocation}, Diet: {profile.dietaryPreference}\n"
    )

    if profile.medicalHistory:
        profile_desc += f"Medical: {profile.medicalHistory}\n"
    if profile.stressLevel:
        profile_desc += f"Stress Level: {profile.stressLevel}\n"

    return f"""Generate a 7-day fitness and diet plan for:
{profile_desc}
Return in this JSON format:

{json.dumps(PLAN_EXEMPLAR, indent=2)}

Create 7 workout days for {profile.fitnessLevel} level at {profile.workoutLocation}.
Adjust diet calories for {profile.fitnessGoal} ({profile.dietaryPreference}).
Return only valid JSON."""
