"""Recording of per-frame instance rotations."""

import json


class RotationRecorder:
    """Records every instance's rotation once per frame.

    Usage:
        recorder = RotationRecorder()
        recorder.start()
        # Each frame, after the animation update:
        recorder.capture(flower.rotations(), dt_ms)
        recorder.stop()
        recorder.save("rotations.json")
    """

    def __init__(self):
        self.frames: list[dict] = []
        self.recording = False

    def start(self):
        """Begin recording, discarding any previous frames."""
        self.frames = []
        self.recording = True

    def stop(self):
        self.recording = False

    def toggle(self):
        """Toggle recording on/off. Returns new recording state."""
        if self.recording:
            self.stop()
        else:
            self.start()
        return self.recording

    def capture(self, rotations: list[float], dt_ms: float):
        """Record a single frame.

        Args:
            rotations: rotation_z of every instance, in radians
            dt_ms: elapsed time applied in this frame
        """
        if not self.recording:
            return
        self.frames.append({
            "rotations": [float(r) for r in rotations],
            "dt_ms": float(dt_ms),
        })

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def save(self, path: str):
        data = {
            "num_frames": len(self.frames),
            "frames": self.frames,
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load(path: str) -> list[dict]:
        """Load recorded frames from JSON.

        Returns:
            List of frame dicts with 'rotations' and 'dt_ms'
        """
        with open(path) as f:
            data = json.load(f)
        return data["frames"]
