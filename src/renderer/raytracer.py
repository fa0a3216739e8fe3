# renderer/raytracer.py
import os
import queue
import threading
from pathlib import Path
from typing import Optional, Union
import numpy as np
from camera.camera import Camera
from core.errors import RenderError
from core.random_source import RandomSource, SeedLike, spawn_sources
from geometry.hittable import Hittable
from renderer.image_io import save_png
from renderer.progress import RenderProgress
from renderer.stripes import STRIPE_COUNT, partition_columns

class _StripeDone:
    __slots__ = ("stripe",)

    def __init__(self, stripe: int):
        self.stripe = stripe

class _StripeFailed:
    __slots__ = ("stripe", "error")

    def __init__(self, stripe: int, error: BaseException):
        self.stripe = stripe
        self.error = error

class Renderer:
    """
    Renders a scene on one thread per column stripe.

    Workers only read the camera and the world and each owns its own
    RandomSource. Finished pixels travel through a single queue to the calling
    thread, which is the only writer of the output buffer.
    """
    def __init__(self, stripes: int = STRIPE_COUNT, seed: SeedLike = None, debug_mode: bool = False):
        self.stripes = stripes
        self.seed = seed
        self.debug_mode = debug_mode

    def render(self, camera: Camera, world: Hittable,
               progress: Optional[RenderProgress] = None) -> np.ndarray:
        """
        Render the world and return a (height, width, 3) uint8 buffer.

        Raises:
            CameraNotInitializedError: If camera.initialize() has not run
            RenderError: If any worker fails; no partial image is returned
        """
        camera.require_initialized()
        width, height = camera.image_width, camera.image_height
        progress = progress or RenderProgress()

        stripes = [s for s in partition_columns(width, self.stripes) if len(s) > 0]
        sources = spawn_sources(len(stripes), self.seed)
        pixels = np.zeros((height, width, 3), dtype=np.uint8)
        results: queue.SimpleQueue = queue.SimpleQueue()
        abort = threading.Event()

        if self.debug_mode:
            print(f"Rendering {width}x{height}, {camera.samples_per_pixel} spp, "
                  f"depth {camera.max_depth} on {len(stripes)} stripes")
            for index, columns in enumerate(stripes):
                print(f"  Stripe {index}: columns {columns.start}..{columns.stop - 1}")

        workers = [
            threading.Thread(
                target=self._render_stripe,
                args=(index, columns, camera, world, source, results, abort),
                name=f"stripe-{index}",
                daemon=True,
            )
            for index, (columns, source) in enumerate(zip(stripes, sources))
        ]

        progress.start([len(columns) * height for columns in stripes])
        try:
            for worker in workers:
                worker.start()
            self._collect(pixels, results, len(workers), progress)
        except BaseException:
            abort.set()
            raise
        finally:
            for worker in workers:
                if worker.ident is not None:
                    worker.join()
            progress.close()

        if self.debug_mode:
            print(f"Render complete: {width * height} pixels")
        return pixels

    def render_to_file(self, camera: Camera, name: str, world: Hittable,
                       output_dir: Union[str, os.PathLike] = "images",
                       progress: Optional[RenderProgress] = None) -> Path:
        """
        Render the world and save it as <output_dir>/<name>.png.
        Nothing is written if rendering fails.
        """
        pixels = self.render(camera, world, progress)
        return save_png(pixels, Path(output_dir) / f"{name}.png")

    @staticmethod
    def _render_stripe(index: int, columns: range, camera: Camera, world: Hittable,
                       rng: RandomSource, results: queue.SimpleQueue, abort: threading.Event):
        try:
            for x in columns:
                if abort.is_set():
                    return
                for y in range(camera.image_height):
                    results.put((index, x, y, camera.sample_pixel(x, y, world, rng)))
        except BaseException as e:
            results.put(_StripeFailed(index, e))
        else:
            results.put(_StripeDone(index))

    @staticmethod
    def _collect(pixels: np.ndarray, results: queue.SimpleQueue, pending: int,
                 progress: RenderProgress):
        """
        Drain the queue until every stripe has reported done.
        """
        while pending:
            item = results.get()
            if isinstance(item, _StripeDone):
                pending -= 1
            elif isinstance(item, _StripeFailed):
                raise RenderError(
                    f"Stripe {item.stripe} failed: {item.error!r}", stripe=item.stripe
                ) from item.error
            else:
                stripe, x, y, rgb = item
                pixels[y, x] = rgb
                progress.advance(stripe)
