"""Main interactive viewer application.

Controls:
    R: Toggle rotation recording
    ESC: Quit

Headless mode (--headless):
    Runs the animation with a fixed frame time without opening a window,
    useful for testing.
"""

import argparse
import itertools
import sys
from typing import Optional

from flower.animation import AnimationDriver, FrameLoop
from flower.config import FlowerConfig, InvalidConfiguration
from flower.instances import build_flower
from viewer.recorder import RotationRecorder

# Perspective camera: 75 degree vertical FOV, two units above the flower
CAMERA_FOV = 75.0
CAMERA_DISTANCE = 2.0
CLIP_NEAR = 0.1
CLIP_FAR = 1000.0


def fixed_step_clock(dt_ms: float):
    """Clock that advances by exactly dt_ms on every read."""
    ticks = itertools.count()
    return lambda: next(ticks) * dt_ms


def run_headless(
    num_frames: int = 60,
    dt_ms: float = 1000.0 / 60.0,
    config: Optional[FlowerConfig] = None,
    output_path: Optional[str] = None,
) -> list[list[float]]:
    """Animate the flower without a display.

    Args:
        num_frames: Number of frames to simulate
        dt_ms: Elapsed time per frame in milliseconds
        config: Flower configuration (defaults to FlowerConfig())
        output_path: If set, save recorded rotations to this JSON file

    Returns:
        Per frame, the rotation_z of every instance
    """
    if config is None:
        config = FlowerConfig()

    flower = build_flower(config)
    driver = AnimationDriver(flower.instances, config.angular_velocity)
    recorder = RotationRecorder()
    recorder.start()

    def render():
        recorder.capture(flower.rotations(), driver.last_dt_ms)

    loop = FrameLoop(driver, render, clock=fixed_step_clock(dt_ms))
    loop.run(max_frames=num_frames)
    recorder.stop()

    if output_path:
        recorder.save(output_path)

    return [frame["rotations"] for frame in recorder.frames]


def run_viewer(config: Optional[FlowerConfig] = None):
    """Launch the interactive OpenGL viewer."""
    try:
        import pygame
        from pygame.locals import DOUBLEBUF, KEYDOWN, OPENGL, QUIT, K_ESCAPE, K_r
        import OpenGL.GL as GL
        import OpenGL.GLU as GLU
    except ImportError as e:
        print(f"Error: {e}")
        print("Install pygame and PyOpenGL: pip install pygame PyOpenGL")
        sys.exit(1)

    from viewer.petal_renderer import PetalRenderer

    if config is None:
        config = FlowerConfig()

    flower = build_flower(config)
    driver = AnimationDriver(flower.instances, config.angular_velocity)
    recorder = RotationRecorder()

    # Initialize pygame + OpenGL
    pygame.init()
    width, height = 800, 600
    pygame.display.set_mode((width, height), DOUBLEBUF | OPENGL)
    pygame.display.set_caption("Flower - R=Record | ESC=Quit")

    GL.glViewport(0, 0, width, height)
    GL.glMatrixMode(GL.GL_PROJECTION)
    GL.glLoadIdentity()
    GLU.gluPerspective(CAMERA_FOV, width / height, CLIP_NEAR, CLIP_FAR)
    GL.glMatrixMode(GL.GL_MODELVIEW)

    renderer = PetalRenderer(flower)
    renderer.init_gl()

    clock = pygame.time.Clock()
    loop = None

    def render():
        for event in pygame.event.get():
            if event.type == QUIT:
                loop.stop()
            elif event.type == KEYDOWN:
                if event.key == K_ESCAPE:
                    loop.stop()
                elif event.key == K_r:
                    is_recording = recorder.toggle()
                    state = "STARTED" if is_recording else f"STOPPED ({recorder.frame_count} frames)"
                    print(f"Recording {state}")
                    if not is_recording and recorder.frame_count > 0:
                        recorder.save("rotations.json")
                        print("Saved rotations.json")

        if recorder.recording:
            recorder.capture(flower.rotations(), driver.last_dt_ms)

        GL.glClear(GL.GL_COLOR_BUFFER_BIT | GL.GL_DEPTH_BUFFER_BIT)
        GL.glLoadIdentity()
        GL.glTranslatef(0.0, 0.0, -CAMERA_DISTANCE)

        renderer.render()

        pygame.display.flip()
        clock.tick(60)

    loop = FrameLoop(driver, render)
    loop.run()

    renderer.cleanup()
    pygame.quit()


def main():
    parser = argparse.ArgumentParser(description="Procedural flower viewer")
    parser.add_argument("--petals", type=int, default=5, help="Number of petals")
    parser.add_argument("--steps", type=int, default=5, help="Distance steps per petal")
    parser.add_argument("--headless", action="store_true", help="Run without display")
    parser.add_argument("--num_frames", type=int, default=60, help="Frames for headless mode")
    parser.add_argument("--dt", type=float, default=1000.0 / 60.0, help="Frame time (ms) for headless mode")
    parser.add_argument("--output", default="rotations.json", help="Output rotations file")
    args = parser.parse_args()

    try:
        config = FlowerConfig(number_of_petals=args.petals, distance_steps=args.steps)
    except InvalidConfiguration as e:
        parser.error(str(e))

    if args.headless:
        frames = run_headless(args.num_frames, args.dt, config, args.output)
        print(f"Headless: animated {len(frames)} frames -> {args.output}")
    else:
        run_viewer(config)


if __name__ == "__main__":
    main()
