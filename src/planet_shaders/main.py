import argparse
import os
import sys
import time

import numpy as np
import PIL.Image

from planet_shaders import constants
from planet_shaders.color import unpack_pixels
from planet_shaders.core import create_scene
from planet_shaders.ui import CSS, create_ui


def generate_samples(scene, frames=24, fps=12.0, out_dir="output"):
    """Render an animation as a numbered PNG sequence."""
    print(f"\n--- Rendering {frames} frames ({scene.width}x{scene.height}) ---")
    os.makedirs(out_dir, exist_ok=True)

    buffer = np.zeros(scene.width * scene.height, dtype=np.uint32)
    for frame in range(frames):
        t_sec = frame / fps
        t0 = time.time()
        scene.render(buffer, t_sec)
        image = unpack_pixels(buffer, scene.width, scene.height)
        filename = os.path.join(out_dir, f"frame_{frame:04d}.png")
        PIL.Image.fromarray(image).save(filename)
        print(f"  {filename} (t={t_sec:.2f}s) in {time.time() - t0:.2f}s")


def run_orbit_verification(scene):
    """Print orbit consistency checks."""
    print("\n--- Orbit Verification ---")
    star = scene.spheres[constants.STAR_INDEX]
    rocky = scene.spheres[constants.ROCKY_INDEX]

    scene.update_orbits(0.0)
    offset = rocky.center - star.center
    print(f"Rocky planet offset at t=0: {np.round(offset, 6)} (Target: [3, 0, 0])")

    quarter = np.pi / (2.0 * constants.TIME_SCALE * constants.ROCKY_ORBIT_RATE)
    scene.update_orbits(quarter)
    offset = rocky.center - star.center
    print(f"Rocky planet offset at t={quarter:.4f}: {np.round(offset, 6)} (Target: [0, 0, 3])")

    moon = scene.spheres[constants.MOON_INDEX]
    separation = np.linalg.norm(moon.center - rocky.center)
    print(f"Moon separation from rocky planet: {separation:.3f}")


def main():
    parser = argparse.ArgumentParser(description="Planet Shaders CPU renderer")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio viewer")
    parser.add_argument("--samples", action="store_true", help="Render an animated PNG sequence")
    parser.add_argument("--verify", action="store_true", help="Run orbit consistency checks")
    parser.add_argument("--width", type=int, default=1024, help="Frame width in pixels")
    parser.add_argument("--height", type=int, default=640, help="Frame height in pixels")
    parser.add_argument("--frames", type=int, default=24, help="Number of frames to render")
    parser.add_argument("--fps", type=float, default=12.0, help="Frames per second of animation time")
    parser.add_argument("--out", default="output", help="Directory for rendered frames")

    args = parser.parse_args()
    scene = create_scene(args.width, args.height)

    if args.ui:
        print("Launching UI...")
        demo = create_ui()
        demo.launch(css=CSS)
    elif args.samples:
        generate_samples(scene, args.frames, args.fps, args.out)
    elif args.verify:
        run_orbit_verification(scene)
    else:
        parser.print_help()


def run_ui():
    """Entry point for planet-shaders-ui command."""
    sys.argv = [sys.argv[0], "--ui"]
    main()


def run_samples():
    """Entry point for planet-shaders-samples command."""
    sys.argv = [sys.argv[0], "--samples"] + sys.argv[1:]
    main()


if __name__ == "__main__":
    main()
