"""
Renderer module - the heart of the ray tracer.

Implements:
- Recursive path tracing bounded by a maximum bounce depth
- Monte-Carlo antialiasing with jittered samples
- Row-parallel rendering on a thread or process pool
- Gamma-2 correction and 8-bit quantization

Every image row draws its random numbers from its own generator seeded by
(seed, row), so the image depends only on the seed and never on how rows are
scheduled across workers.
"""

from __future__ import annotations
import logging
import os
from concurrent.futures import Executor, Future, ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Callable
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable
from .materials import scatter

logger = logging.getLogger(__name__)

# Lower bound of the hit interval; keeps scattered rays from re-hitting
# the surface they leave.
T_MIN = 0.001

EXECUTORS = ('thread', 'process')


class RenderError(Exception):
    """A row task failed; the image is incomplete."""

    def __init__(self, row: int, message: str = ""):
        self.row = row
        super().__init__(message or f"Rendering row {row} failed")


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 1920
    height: Optional[int] = None  # None = derive from aspect_ratio
    aspect_ratio: float = 3.0 / 2.0
    samples_per_pixel: int = 32
    max_depth: int = 50
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None  # None = fresh entropy
    executor: str = 'thread'

    def __post_init__(self):
        if self.height is None:
            self.height = int(self.width / self.aspect_ratio)
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"Unknown executor {self.executor!r}, expected one of {EXECUTORS}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must not be negative, got {self.num_threads}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must not be negative, got {self.seed}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4
        if self.seed is None:
            self.seed = int(np.random.SeedSequence().entropy)


def row_rng(seed: int, row: int) -> np.random.Generator:
    """Random generator owned by a single image row."""
    return np.random.default_rng([seed, row])


def sky_color(ray: Ray) -> Color:
    """White-to-blue vertical gradient used for rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return Color(1.0, 1.0, 1.0) * (1.0 - t) + Color(0.5, 0.7, 1.0) * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """Compute the color carried back along a ray.

    Written as a loop: each bounce multiplies the running attenuation until
    the ray escapes to the sky, is absorbed, or runs out of depth.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Remaining bounces; 0 yields black
        rng: Random source of the calling row

    Returns:
        The computed color for this ray
    """
    attenuation = Color(1.0, 1.0, 1.0)

    while depth > 0:
        hit = world.hit(ray, T_MIN, float('inf'))
        if hit is None:
            return attenuation * sky_color(ray)

        result = scatter(hit.material, ray, hit, rng)
        if result is None:
            return Color(0, 0, 0)

        attenuation = attenuation * result.attenuation
        ray = result.scattered_ray
        depth -= 1

    return Color(0, 0, 0)


def render_row(world: Hittable, camera: Camera, settings: RenderSettings, row: int) -> np.ndarray:
    """Render one image row.

    Args:
        world: The scene
        camera: The camera
        settings: Render configuration
        row: Image row index, 0 being the top of the image

    Returns:
        Averaged linear colors, shape (width, 3)
    """
    width = settings.width
    height = settings.height
    samples = settings.samples_per_pixel
    rng = row_rng(settings.seed, row)

    # Image rows run top to bottom, camera v runs bottom to top
    y = height - 1 - row
    pixels = np.zeros((width, 3), dtype=np.float64)

    for x in range(width):
        pixel_color = Color(0, 0, 0)
        for _ in range(samples):
            u = (x + rng.random()) / (width - 1)
            v = (y + rng.random()) / (height - 1)
            ray = camera.get_ray(u, v, rng)
            pixel_color = pixel_color + ray_color(ray, world, settings.max_depth, rng)
        pixels[x] = pixel_color.to_array() / samples

    return pixels


# Scene state for process workers, installed once per worker process
_worker_state: Optional[tuple] = None


def _init_worker(world: Hittable, camera: Camera, settings: RenderSettings) -> None:
    global _worker_state
    _worker_state = (world, camera, settings)


def _render_row_in_worker(row: int) -> np.ndarray:
    world, camera, settings = _worker_state
    return render_row(world, camera, settings, row)


class Renderer:
    """Path tracing renderer with row-parallel workers."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Blocks until every row is done. If any row fails, the remaining rows
        are cancelled and RenderError is raised; no partial image is returned.

        Args:
            scene: The scene to render
            camera: The camera to render from

        Returns:
            Averaged linear colors as numpy array of shape (height, width, 3),
            first row at the top of the image
        """
        settings = self.settings
        height = settings.height
        image = np.zeros((height, settings.width, 3), dtype=np.float64)

        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d %s workers, seed %d",
            settings.width, height, settings.samples_per_pixel, settings.max_depth,
            settings.num_threads, settings.executor, settings.seed
        )

        with self._make_executor(scene, camera) as executor:
            futures = {self._submit(executor, scene, camera, row): row for row in range(height)}
            completed = 0
            try:
                for future in as_completed(futures):
                    row = futures[future]
                    try:
                        image[row] = future.result()
                    except Exception as exc:
                        logger.error("Row %d failed: %s", row, exc)
                        raise RenderError(row, f"Rendering row {row} failed: {exc}") from exc

                    completed += 1
                    if self._progress_callback:
                        self._progress_callback(completed / height)
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        logger.info("Rendered %d rows", height)
        return image

    def _make_executor(self, scene: Hittable, camera: Camera) -> Executor:
        workers = self.settings.num_threads
        if self.settings.executor == 'process':
            return ProcessPoolExecutor(
                max_workers=workers,
                initializer=_init_worker,
                initargs=(scene, camera, self.settings)
            )
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix='render-row')

    def _submit(self, executor: Executor, scene: Hittable, camera: Camera, row: int) -> Future:
        if isinstance(executor, ProcessPoolExecutor):
            return executor.submit(_render_row_in_worker, row)
        return executor.submit(render_row, scene, camera, self.settings, row)


def gamma_correct(image: np.ndarray) -> np.ndarray:
    """Apply gamma 2 correction (component-wise square root)."""
    return np.sqrt(np.clip(image, 0.0, None))


def to_ldr(image: np.ndarray) -> np.ndarray:
    """Convert linear colors to 8-bit values.

    Each component becomes trunc(256 * clamp(sqrt(c), 0, 0.999)), so 0.0 maps
    to 0 and anything at or above 0.999**2 maps to 255.

    Args:
        image: Linear color array (any shape, last axis RGB)

    Returns:
        uint8 array of the same shape
    """
    corrected = np.clip(gamma_correct(image), 0.0, 0.999)
    return (256.0 * corrected).astype(np.uint8)
