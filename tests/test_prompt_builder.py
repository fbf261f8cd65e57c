"""
Tests for prompt construction.
"""
import json

from fitplan.models.user import UserProfile
from fitplan.services.prompt_builder import (
    PLAN_EXEMPLAR,
    build_fitness_plan_prompt,
    calculate_bmi,
)


class TestCalculateBMI:

    def test_rounds_to_one_decimal(self):
        assert calculate_bmi(170, 70) == 24.2
        assert calculate_bmi(180, 80) == 24.7

    def test_extreme_values(self):
        assert calculate_bmi(100, 300) == 300.0


class TestBuildFitnessPlanPrompt:

    def test_contains_bmi(self, sample_profile):
        sample_profile.update(height=170, weight=70)
        prompt = build_fitness_plan_prompt(UserProfile(**sample_profile))

        assert "24.2" in prompt

    def test_is_deterministic(self, sample_profile):
        profile = UserProfile(**sample_profile)
        assert build_fitness_plan_prompt(profile) == build_fitness_plan_prompt(UserProfile(**sample_profile))

    def test_includes_profile_and_scaling_directives(self, sample_profile):
        prompt = build_fitness_plan_prompt(UserProfile(**sample_profile))

        assert "Name: Priya, Age: 28, Gender: Female" in prompt
        assert "Height: 165cm, Weight: 60kg" in prompt
        assert "Create 7 workout days for Beginner level at Home." in prompt
        assert "Adjust diet calories for Weight Loss (Vegetarian)." in prompt
        assert prompt.endswith("Return only valid JSON.")

    def test_embeds_exemplar_json(self, sample_profile):
        prompt = build_fitness_plan_prompt(UserProfile(**sample_profile))
        assert json.dumps(PLAN_EXEMPLAR, indent=2) in prompt

    def test_optional_lines(self, sample_profile):
        without = build_fitness_plan_prompt(UserProfile(**sample_profile))
        assert "Medical:" not in without

        sample_profile["medicalHistory"] = "Mild asthma"
        with_history = build_fitness_plan_prompt(UserProfile(**sample_profile))
        assert "Medical: Mild asthma" in with_history
        assert "Stress Level: Medium" in with_history
