"""
Tests for Pollinations image URLs and the image cache.
"""
import asyncio
import io
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from PIL import Image

from fitplan.services.image_service import (
    ImageCache,
    create_exercise_prompt,
    create_meal_prompt,
    exercise_cache_key,
    generate_image_url,
    meal_cache_key,
    preload_image,
)


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(139, 92, 246)).save(buf, format="PNG")
    return buf.getvalue()


class TestGenerateImageUrl:

    def test_default_options(self):
        url = generate_image_url("  push   up\nform ")
        assert url == "https://image.pollinations.ai/prompt/push%20up%20form?nologo=true&enhance=true"

    def test_custom_size_and_seed(self):
        url = generate_image_url("squat", width=768, height=512, seed=42, nologo=False, enhance=False)
        assert url == "https://image.pollinations.ai/prompt/squat?width=768&seed=42"

    def test_encodes_reserved_characters(self):
        url = generate_image_url("oats & berries: 50/50", enhance=False, nologo=False)
        assert url == "https://image.pollinations.ai/prompt/oats%20%26%20berries%3A%2050%2F50"


class TestPrompts:

    def test_exercise_prompt_with_equipment(self):
        prompt = create_exercise_prompt("Bench Press", "Barbell")
        assert prompt.startswith("professional fitness photo of Bench Press exercise using Barbell,")

    def test_exercise_prompt_bodyweight(self):
        assert " bodyweight," in create_exercise_prompt("Push-ups", "None")
        assert " bodyweight," in create_exercise_prompt("Push-ups")

    def test_meal_prompt_uses_three_items(self):
        prompt = create_meal_prompt("Lunch", ["rice", "dal", "salad", "curd"])
        assert "Lunch: rice, dal, salad," in prompt
        assert "curd" not in prompt

    def test_cache_keys(self):
        assert exercise_cache_key("Push-ups", "None") == "img_exercise_push_ups_none"
        assert meal_cache_key("Light Dinner") == "img_meal_light_dinner"


class TestPreloadAndCache:

    def test_preload_verifies_image(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, content=_png_bytes()))
        url = "https://image.pollinations.ai/prompt/squat"
        assert asyncio.run(preload_image(url, transport=transport)) == url

    def test_preload_rejects_non_image(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, content=b"<html>busy</html>"))
        with pytest.raises(ValueError):
            asyncio.run(preload_image("https://image.pollinations.ai/prompt/x", transport=transport))

    def test_cache_hit_skips_generation(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            return httpx.Response(200, content=_png_bytes())

        cache = ImageCache(transport=httpx.MockTransport(handler))
        first = asyncio.run(cache.generate_and_cache("img_exercise_squat", "squat"))
        second = asyncio.run(cache.generate_and_cache("img_exercise_squat", "something else"))

        assert first == second
        assert len(calls) == 1

    def test_failure_not_cached(self):
        cache = ImageCache(transport=httpx.MockTransport(lambda r: httpx.Response(503)))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(cache.generate_and_cache("img_meal_x", "x"))
        assert cache.get("img_meal_x") is None

    def test_clear_removes_image_entries(self):
        cache = ImageCache(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=_png_bytes())))
        asyncio.run(cache.generate_and_cache("img_meal_x", "x"))
        cache.clear()
        assert cache.get("img_meal_x") is None

    def test_evicts_least_recently_used(self):
        cache = ImageCache(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, content=_png_bytes())),
            max_entries=2,
        )

        async def fill():
            await cache.generate_and_cache("img_meal_a", "a")
            await cache.generate_and_cache("img_meal_b", "b")
            cache.get("img_meal_a")
            await cache.generate_and_cache("img_meal_c", "c")

        asyncio.run(fill())

        assert len(cache) == 2
        assert cache.get("img_meal_b") is None
        assert cache.get("img_meal_a") is not None
        assert cache.get("img_meal_c") is not None


class TestImageRoutes:

    @patch("fitplan.services.image_service.preload_image", new_callable=AsyncMock)
    def test_exercise_image(self, mock_preload, client):
        response = client.get("/images/exercise", params={"name": "Deadlift", "equipment": "Barbell"})

        assert response.status_code == 200
        assert response.json()["url"].startswith("https://image.pollinations.ai/prompt/professional%20fitness")

    @patch("fitplan.services.image_service.preload_image", new_callable=AsyncMock)
    def test_image_failure_is_502(self, mock_preload, client):
        mock_preload.side_effect = ValueError("not an image")
        response = client.get("/images/meal", params={"name": "Unique Failing Meal", "items": ["a"]})
        assert response.status_code == 502
