"""Render the animated flower to PNG frames with a software rasterizer.

This avoids any OpenGL dependency, so frames can be produced on headless
servers and in CI. Petals are drawn unlit and single-sided: triangles
whose winding is clockwise on screen are culled, exactly like the
interactive viewer.
"""

import argparse
import os
from typing import Optional

import numpy as np
from PIL import Image

from flower.animation import AnimationDriver, FrameLoop
from flower.config import FlowerConfig, InvalidConfiguration
from flower.instances import Flower, build_flower
from viewer.app import CAMERA_DISTANCE, CAMERA_FOV, fixed_step_clock


def view_from_axis(vertices: np.ndarray, camera_distance: float) -> np.ndarray:
    """Move world points into the frame of a camera on the Z axis.

    The camera sits at (0, 0, camera_distance) looking at the origin with
    +Y up and looks down its own -Z. A negative distance views the
    underside, which mirrors x and z.

    Args:
        vertices: (N, 3) world-space positions
        camera_distance: non-zero camera position on Z

    Returns:
        (N, 3) camera-space positions
    """
    if camera_distance == 0:
        raise ValueError("camera_distance must be non-zero")
    side = 1.0 if camera_distance > 0 else -1.0
    cam_pts = np.asarray(vertices, dtype=np.float64) * np.array([side, 1.0, side])
    cam_pts[:, 2] -= abs(camera_distance)
    return cam_pts


def project_vertices(cam_pts: np.ndarray, focal: float, height: int, width: int) -> np.ndarray:
    """Perspective-project camera-space points to [x, y, depth] pixels.

    Screen y grows downwards, so a triangle that is counter-clockwise
    seen from the camera is clockwise on screen. Points at or behind the
    camera get a negative depth.
    """
    depth = -cam_pts[:, 2]
    valid = depth > 0.01

    screen = np.full((len(cam_pts), 3), -1.0)
    screen[valid, 0] = width * 0.5 + focal * cam_pts[valid, 0] / depth[valid]
    screen[valid, 1] = height * 0.5 - focal * cam_pts[valid, 1] / depth[valid]
    screen[valid, 2] = depth[valid]
    return screen


def rasterize_triangle(
    v0: np.ndarray,
    v1: np.ndarray,
    v2: np.ndarray,
    color: np.ndarray,
    image: np.ndarray,
    zbuf: np.ndarray,
    cull_back_faces: bool = True,
) -> bool:
    """Rasterize a single flat-colored triangle with z-buffer.

    Returns:
        False if the triangle was culled or degenerate, True otherwise
    """
    H, W = zbuf.shape

    e01 = v1[:2] - v0[:2]
    e02 = v2[:2] - v0[:2]
    det = e01[0] * e02[1] - e01[1] * e02[0]
    if abs(det) < 1e-10:
        return False
    # Front faces have det < 0 with screen y pointing down
    if cull_back_faces and det > 0:
        return False
    inv_det = 1.0 / det

    # Bounding box
    xs = [v0[0], v1[0], v2[0]]
    ys = [v0[1], v1[1], v2[1]]
    min_x = max(int(np.floor(min(xs))), 0)
    max_x = min(int(np.ceil(max(xs))), W - 1)
    min_y = max(int(np.floor(min(ys))), 0)
    max_y = min(int(np.ceil(max(ys))), H - 1)

    if min_x > max_x or min_y > max_y:
        return True

    for py in range(min_y, max_y + 1):
        for px in range(min_x, max_x + 1):
            p = np.array([px + 0.5, py + 0.5])
            ep = p - v0[:2]
            u = (ep[0] * e02[1] - ep[1] * e02[0]) * inv_det
            v = (e01[0] * ep[1] - e01[1] * ep[0]) * inv_det
            w = 1.0 - u - v

            if u >= 0 and v >= 0 and w >= 0:
                z = w * v0[2] + u * v1[2] + v * v2[2]
                if z < zbuf[py, px]:
                    zbuf[py, px] = z
                    image[py, px] = color
    return True


def render_flower(
    flower: Flower,
    height: int = 128,
    width: int = 128,
    camera_distance: float = CAMERA_DISTANCE,
    fov: float = CAMERA_FOV,
    background: Optional[np.ndarray] = None,
    cull_back_faces: bool = True,
) -> np.ndarray:
    """Render every instance of the flower from a camera on the Z axis.

    Args:
        flower: Flower with its instances at their current rotation
        height: image height
        width: image width
        camera_distance: camera position on Z; negative looks at the underside
        fov: vertical field of view in degrees
        background: (3,) background color, default white
        cull_back_faces: skip triangles facing away from the camera

    Returns:
        (H, W, 3) rendered image in [0, 1]
    """
    if background is None:
        background = np.array([1.0, 1.0, 1.0])

    focal = height * 0.5 / np.tan(np.radians(fov) * 0.5)

    image = np.full((height, width, 3), background, dtype=np.float64)
    zbuf = np.full((height, width), np.inf, dtype=np.float64)

    for i, instance in enumerate(flower.instances):
        color = np.asarray(flower.appearance_for(instance).color, dtype=np.float64)
        triangles = flower.instance_positions(i)
        cam_pts = view_from_axis(triangles.reshape(-1, 3), camera_distance)
        screen = project_vertices(cam_pts, focal, height, width)
        screen = screen.reshape(-1, 3, 3)

        for v0, v1, v2 in screen:
            # Skip if any vertex is behind camera
            if v0[2] <= 0 or v1[2] <= 0 or v2[2] <= 0:
                continue
            rasterize_triangle(v0, v1, v2, color, image, zbuf, cull_back_faces)

    return image.astype(np.float32)


def render_animation(
    config: Optional[FlowerConfig] = None,
    num_frames: int = 30,
    dt_ms: float = 1000.0 / 60.0,
    output_dir: str = "output/frames",
    image_size: int = 128,
    verbose: bool = True,
) -> list[str]:
    """Animate the flower and save one PNG per frame.

    Args:
        config: Flower configuration (defaults to FlowerConfig())
        num_frames: Number of frames to render
        dt_ms: Elapsed time per frame in milliseconds
        output_dir: Directory for output frame images
        image_size: Image height and width
        verbose: Print progress

    Returns:
        List of output image file paths
    """
    if config is None:
        config = FlowerConfig()

    os.makedirs(output_dir, exist_ok=True)

    flower = build_flower(config)
    driver = AnimationDriver(flower.instances, config.angular_velocity)

    if verbose:
        mesh = flower.meshes[0]
        print(f"Rendering {num_frames} frames at {image_size}x{image_size}")
        print(f"Flower: {len(flower.instances)} petals, {mesh.triangle_count} triangles per petal")

    output_paths = []

    def render():
        img = render_flower(flower, image_size, image_size)
        img_uint8 = (np.clip(img, 0, 1) * 255).astype(np.uint8)

        frame_path = os.path.join(output_dir, f"frame_{len(output_paths):05d}.png")
        Image.fromarray(img_uint8).save(frame_path)
        output_paths.append(frame_path)

        if verbose:
            print(f"  Frame {len(output_paths)}/{num_frames}: {frame_path}")

    loop = FrameLoop(driver, render, clock=fixed_step_clock(dt_ms))
    loop.run(max_frames=num_frames)

    if verbose:
        print(f"Done. {len(output_paths)} frames saved to {output_dir}/")
        print(f"To make a video: ffmpeg -framerate 60 -i {output_dir}/frame_%05d.png -c:v libx264 -pix_fmt yuv420p output.mp4")

    return output_paths


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Render the animated flower to PNG frames")
    parser.add_argument("--petals", type=int, default=5, help="Number of petals")
    parser.add_argument("--steps", type=int, default=5, help="Distance steps per petal")
    parser.add_argument("--frames", type=int, default=30, help="Number of frames")
    parser.add_argument("--dt", type=float, default=1000.0 / 60.0, help="Frame time in ms")
    parser.add_argument("--size", type=int, default=128, help="Image size")
    parser.add_argument("--output", default="output/frames", help="Output directory")
    args = parser.parse_args()

    try:
        config = FlowerConfig(number_of_petals=args.petals, distance_steps=args.steps)
    except InvalidConfiguration as e:
        parser.error(str(e))

    render_animation(config, args.frames, args.dt, args.output, args.size)
