"""
Illustrative image URLs via Pollinations.ai, with a small key-value cache.
"""
import io
import re
from collections import OrderedDict
from urllib.parse import quote, urlencode

import httpx
from PIL import Image, UnidentifiedImageError

from fitplan.core.config import settings
from fitplan.core.logger import logger, log_error


POLLINATIONS_BASE_URL = "https://image.pollinations.ai/prompt"
DEFAULT_SIZE = 512
CACHE_PREFIX = "img_"
PRELOAD_TIMEOUT = 60
MAX_CACHED_IMAGES = 256


def generate_image_url(
    prompt: str,
    width: int = DEFAULT_SIZE,
    height: int = DEFAULT_SIZE,
    seed: int | None = None,
    nologo: bool = True,
    enhance: bool = True
) -> str:
    """
    Build a Pollinations image URL for a text prompt.

    Only non-default dimensions are sent as query parameters.
    """
    clean_prompt = re.sub(r"\s+", " ", prompt.strip())
    encoded_prompt = quote(clean_prompt, safe="!~*'()")

    params = {}
    if width != DEFAULT_SIZE:
        params["width"] = width
    if height != DEFAULT_SIZE:
        params["height"] = height
    if seed:
        params["seed"] = seed
    if nologo:
        params["nologo"] = "true"
    if enhance:
        params["enhance"] = "true"

    base_url = f"{POLLINATIONS_BASE_URL}/{encoded_prompt}"
    return f"{base_url}?{urlencode(params)}" if params else base_url


def create_exercise_prompt(exercise_name: str, equipment: str | None = None) -> str:
    """Prompt for an exercise photo."""
    base_prompt = f"professional fitness photo of {exercise_name} exercise"
    equipment_text = f" using {equipment}" if equipment and equipment != "None" else " bodyweight"
    return f"{base_prompt}{equipment_text}, gym environment, high quality, detailed, realistic, fitness photography"


def create_meal_prompt(meal_name: str, items: list[str]) -> str:
    """Prompt for a meal photo; only the first three items are used."""
    items_text = ", ".join(items[:3])
    return f"professional food photography of {meal_name}: {items_text}, appetizing, colorful, high quality, overhead view, restaurant quality"


async def preload_image(url: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    """
    Fetch the image once so it is generated upstream, and check it decodes.

    Returns:
        The same URL

    Raises:
        httpx.HTTPError: If the download fails
        ValueError: If the payload is not an image
    """
    async with httpx.AsyncClient(timeout=PRELOAD_TIMEOUT, transport=transport) as client:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()

    try:
        with Image.open(io.BytesIO(response.content)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError("Generated image could not be decoded") from e

    logger.info(f"Image ready ({len(response.content)} bytes)")
    return url


class ImageCache:
    """
    Maps cache keys to generated image URLs.

    Holds at most ``max_entries`` URLs; the least recently used entry is
    evicted first.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None, max_entries: int = MAX_CACHED_IMAGES):
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._transport = transport
        self.max_entries = max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> str | None:
        url = self._entries.get(key)
        if url is not None:
            self._entries.move_to_end(key)
        return url

    async def generate_and_cache(self, cache_key: str, prompt: str, **options) -> str:
        """
        Return the cached URL for ``cache_key`` or generate, preload and store one.

        Failed preloads are not cached and propagate to the caller.
        """
        cached = self.get(cache_key)
        if cached:
            return cached

        image_url = generate_image_url(prompt, **options)
        try:
            await preload_image(image_url, transport=self._transport)
        except Exception as e:
            log_error("Image generation", e)
            raise

        self._entries[cache_key] = image_url
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cached image {evicted}")
        return image_url

    def clear(self) -> None:
        """Drop every image entry."""
        for key in [k for k in self._entries if k.startswith(CACHE_PREFIX)]:
            del self._entries[key]


def exercise_cache_key(name: str, equipment: str | None = None) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", f"{name} {equipment or ''}".lower()).strip("_")
    return f"{CACHE_PREFIX}exercise_{slug}"


def meal_cache_key(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
    return f"{CACHE_PREFIX}meal_{slug}"


image_cache = ImageCache(max_entries=settings.IMAGE_CACHE_SIZE)
