import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.animation as animation
import numpy as np

from planet_shaders import constants
from planet_shaders.core import create_scene

BODY_COLORS = {
    constants.STAR_INDEX: "gold",
    constants.ROCKY_INDEX: "sienna",
    constants.MOON_INDEX: "silver",
    constants.GAS_GIANT_INDEX: "cornflowerblue",
}
BODY_NAMES = {
    constants.STAR_INDEX: "Star",
    constants.ROCKY_INDEX: "Rocky planet",
    constants.MOON_INDEX: "Moon",
    constants.GAS_GIANT_INDEX: "Gas giant",
}


def sample_orbits(scene, times):
    """
    Body centers over time.

    Returns:
        (T, B, 3) array of centers for T times and B bodies
    """
    paths = np.zeros((len(times), len(scene.spheres), 3))
    for k, t_sec in enumerate(times):
        scene.update_orbits(t_sec)
        paths[k] = [sphere.center for sphere in scene.spheres]
    return paths


def create_visualization(duration=20.0, frames=60, out_dir="output"):
    scene = create_scene(320, 200)
    times = np.linspace(0.0, duration, 400)
    paths = sample_orbits(scene, times)

    fig = plt.figure(figsize=(14, 6))
    ax1 = fig.add_subplot(1, 2, 1)  # Top down (X-Z)
    ax2 = fig.add_subplot(1, 2, 2)  # Camera view

    def update(frame):
        time_sec = frame * duration / frames

        ax1.clear()
        ax1.set_title("System View (X-Z plane)")
        ax1.set_aspect('equal')
        ax1.set_xlim(-8, 8)
        ax1.set_ylim(-8, 8)
        for index, color in BODY_COLORS.items():
            ax1.plot(paths[:, index, 0], paths[:, index, 2], color=color, alpha=0.4, linewidth=1)

        scene.update_orbits(time_sec)
        for index, sphere in enumerate(scene.spheres):
            body = plt.Circle((sphere.center[0], sphere.center[2]), sphere.radius,
                              color=BODY_COLORS[index], label=BODY_NAMES[index], zorder=5)
            ax1.add_patch(body)
        cam = scene.camera_position
        ax1.plot(cam[0], np.clip(cam[2], -7.8, 7.8), 'r^', markersize=8, zorder=10)
        ax1.legend(loc="upper right", fontsize=8)

        ax2.clear()
        ax2.set_title(f"Camera View (t={time_sec:.1f}s)")
        ax2.axis('off')
        ax2.imshow(scene.render_image(time_sec))

    ani = animation.FuncAnimation(fig, update, frames=frames, interval=100)

    os.makedirs(out_dir, exist_ok=True)
    target = os.path.join(out_dir, "orbits.gif")
    print(f"Saving animation to {target}...")
    ani.save(target, writer='pillow', fps=10)
    plt.close(fig)
    print("Done.")


if __name__ == "__main__":
    create_visualization()
