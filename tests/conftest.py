"""
Pytest fixtures for the FitPlan Microservice tests.
"""
import copy
import json

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, AsyncMock

# Mock environment variables before importing app
import os
os.environ.setdefault("GOOGLE_GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("ELEVENLABS_API_KEY", "test-elevenlabs-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fitplan.main import app
from fitplan.core.config import Settings, get_settings
from fitplan.routes.plans import get_plan_store
from fitplan.services.plan_store import PlanStore


SAMPLE_PLAN = {
    "workoutPlan": {
        "days": [
            {
                "day": "Day 1",
                "focus": "Full Body",
                "warmup": "5 minutes brisk walking",
                "exercises": [
                    {
                        "name": "Bodyweight Squats",
                        "sets": 3,
                        "reps": "12-15",
                        "rest": "60 seconds",
                        "equipment": "None",
                        "notes": "Keep knees behind toes"
                    },
                    {
                        "name": "Plank",
                        "sets": 3,
                        "reps": "30 seconds",
                        "rest": "45 seconds"
                    }
                ],
                "cooldown": "5 minutes stretching"
            },
            {
                "day": "Day 2",
                "focus": "Active Recovery",
                "warmup": "Light mobility work",
                "exercises": [
                    {"name": "Yoga Flow", "sets": 1, "reps": "20 minutes", "rest": "None"}
                ],
                "cooldown": "Deep breathing"
            }
        ]
    },
    "dietPlan": {
        "breakfast": {
            "name": "Vegetable Poha",
            "time": "8:00 AM",
            "items": ["Poha with peas", "Green tea"],
            "calories": 350,
            "protein": 10,
            "carbs": 55,
            "fats": 8
        },
        "lunch": {
            "name": "Dal and Rice",
            "time": "1:00 PM",
            "items": ["Moong dal", "Brown rice", "Cucumber salad"],
            "calories": 500,
            "protein": 20,
            "carbs": 80,
            "fats": 10
        },
        "eveningSnack": {
            "name": "Roasted Chana",
            "time": "5:00 PM",
            "items": ["Roasted chickpeas"],
            "calories": 150,
            "protein": 8,
            "carbs": 20,
            "fats": 3
        },
        "dinner": {
            "name": "Paneer Stir Fry",
            "time": "8:00 PM",
            "items": ["Paneer", "Mixed vegetables", "Two rotis"],
            "calories": 450,
            "protein": 25,
            "carbs": 40,
            "fats": 18
        },
        "totalCalories": 1450,
        "totalProtein": 63,
        "totalCarbs": 195,
        "totalFats": 39
    },
    "tips": [
        "Drink at least 2 litres of water a day",
        "Sleep 7-8 hours"
    ],
    "motivation": "Small steps every day add up to big changes."
}


@pytest.fixture
def sample_plan():
    """A generator response matching the exemplar schema."""
    return copy.deepcopy(SAMPLE_PLAN)


@pytest.fixture
def sample_plan_text(sample_plan):
    return json.dumps(sample_plan, indent=2)


@pytest.fixture
def sample_profile():
    """Valid intake form payload."""
    return {
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


@pytest.fixture
def test_settings(tmp_path):
    """Settings with fake credentials and a temporary plan store."""
    return Settings(
        GOOGLE_GEMINI_API_KEY="test-gemini-key",
        ELEVENLABS_API_KEY="test-elevenlabs-key",
        PLAN_STORE_DIR=str(tmp_path / "store"),
    )


@pytest.fixture
def plan_store(test_settings):
    return PlanStore(test_settings.PLAN_STORE_DIR, max_plans=test_settings.MAX_SAVED_PLANS)


@pytest.fixture
def client(test_settings, plan_store):
    """Create a test client with substituted settings and store."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_plan_store] = lambda: plan_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_gemini():
    """Mock the single Gemini call used by plan and tagline generation."""
    with patch("fitplan.services.gemini_service.call_gemini", new_callable=AsyncMock) as mock:
        yield mock
