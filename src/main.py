# main.py
import argparse
import sys
import time
from typing import Callable, Dict, Optional, Sequence, Tuple
from camera.camera import Camera
from core.errors import ConfigurationError, RenderError
from core.random_source import RandomSource
from core.vector import Color, Point3, Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.lambertian import Lambertian
from materials.metal import Metal
from renderer.progress import TqdmProgress
from renderer.raytracer import Renderer

QUALITY_LEVELS = {
    "draft": {"width": 200, "samples": 4, "depth": 5},
    "preview": {"width": 400, "samples": 20, "depth": 10},
    "final": {"width": 1200, "samples": 100, "depth": 50},
}

def final_scene(rng: RandomSource) -> Tuple[HittableList, Camera]:
    """
    A field of small random spheres around three large ones.
    """
    world = HittableList()

    ground = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, ground))

    keep_clear = Point3(4.0, 0.2, 0.0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.uniform()
            center = Point3(a + 0.9 * rng.uniform(), 0.2, b + 0.9 * rng.uniform())
            if (center - keep_clear).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # Diffuse
                albedo = Color(rng.uniform(), rng.uniform(), rng.uniform())
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # Metal
                albedo = Color(rng.uniform_in(0.5, 1.0), rng.uniform_in(0.5, 1.0), rng.uniform_in(0.5, 1.0))
                material = Metal(albedo, rng.uniform_in(0.0, 0.5))
            else:
                # Glass
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        vfov=20.0,
        lookfrom=Point3(13.0, 2.0, 3.0),
        lookat=Point3(0.0, 0.0, 0.0),
        vup=Vector3(0.0, 1.0, 0.0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, camera

def three_spheres_scene(rng: RandomSource) -> Tuple[HittableList, Camera]:
    """
    Diffuse, hollow glass and metal spheres on a large ground sphere,
    seen through a wide aperture.
    """
    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, Lambertian(Color(0.8, 0.8, 0.0))))
    world.add(Sphere(Point3(0.0, 0.0, -1.2), 0.5, Lambertian(Color(0.1, 0.2, 0.5))))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, Dielectric(1.50)))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.4, Dielectric(1.00 / 1.50)))  # Air bubble
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, Metal(Color(0.8, 0.6, 0.2), 1.0)))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        vfov=20.0,
        lookfrom=Point3(-2.0, 2.0, 1.0),
        lookat=Point3(0.0, 0.0, -1.0),
        vup=Vector3(0.0, 1.0, 0.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, camera

def single_sphere_scene(rng: RandomSource) -> Tuple[HittableList, Camera]:
    """
    One diffuse unit sphere at the origin viewed along -z.
    """
    world = HittableList()
    world.add(Sphere(Point3(0.0, 0.0, 0.0), 1.0, Lambertian(Color(0.5, 0.5, 0.5))))
    camera = Camera(
        aspect_ratio=1.0,
        vfov=90.0,
        lookfrom=Point3(0.0, 0.0, 3.0),
        lookat=Point3(0.0, 0.0, 0.0),
        focus_dist=3.0,
    )
    return world, camera

SCENES: Dict[str, Callable[[RandomSource], Tuple[HittableList, Camera]]] = {
    "final": final_scene,
    "three-spheres": three_spheres_scene,
    "single": single_sphere_scene,
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Offline path tracer for sphere scenes.")
    parser.add_argument("name", help="output image name; written to <output-dir>/<name>.png")
    parser.add_argument("--scene", choices=sorted(SCENES), default="final")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default="preview")
    parser.add_argument("--width", type=int, help="image width in pixels (overrides quality)")
    parser.add_argument("--samples", type=int, help="samples per pixel (overrides quality)")
    parser.add_argument("--depth", type=int, help="maximum bounces (overrides quality)")
    parser.add_argument("--seed", type=int, help="seed for scene generation and sampling")
    parser.add_argument("--output-dir", default="images")
    parser.add_argument("--no-progress", action="store_true", help="disable progress bars")
    parser.add_argument("--debug", action="store_true", help="print stripe layout and timings")
    return parser

def configure_camera(camera: Camera, args: argparse.Namespace) -> Camera:
    """Apply the quality preset, then any explicit overrides."""
    quality = QUALITY_LEVELS[args.quality]
    camera.image_width = args.width if args.width is not None else quality["width"]
    camera.samples_per_pixel = args.samples if args.samples is not None else quality["samples"]
    camera.max_depth = args.depth if args.depth is not None else quality["depth"]
    return camera.initialize()

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        world, camera = SCENES[args.scene](RandomSource(args.seed))
        configure_camera(camera, args)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    print(f"Scene '{args.scene}': {len(world)} spheres")
    print(f"Rendering {camera.image_width}x{camera.image_height} at "
          f"{camera.samples_per_pixel} samples per pixel, max depth {camera.max_depth}")

    renderer = Renderer(seed=args.seed, debug_mode=args.debug)
    progress = None if args.no_progress else TqdmProgress()
    start = time.perf_counter()
    try:
        path = renderer.render_to_file(camera, args.name, world, args.output_dir, progress)
    except RenderError as e:
        print(f"Render failed: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Could not save image: {e}", file=sys.stderr)
        return 1

    print(f"Saved {path} in {time.perf_counter() - start:.1f}s")
    return 0

if __name__ == "__main__":
    sys.exit(main())
