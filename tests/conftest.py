"""Shared fixtures: synthetic face mesh frames and fake collaborators."""

from typing import List, Optional

import numpy as np
import pytest

from face_emoji.models import Landmark

MESH_SIZE = 468

# Dyadic coordinates keep the direction offsets exact in floating point
LEFT_EYE = (0.25, 0.5)
RIGHT_EYE = (0.75, 0.5)
CHIN = (0.5, 0.5)

EYE_TOP_Y = 0.40
MOUTH_Y = 0.60


def make_face(
    nose=(0.5, 0.5),
    left_eye=LEFT_EYE,
    right_eye=RIGHT_EYE,
    chin=CHIN,
    left_eye_open=0.03,
    right_eye_open=0.03,
    brow_raise=0.05,
    mouth_open=0.0,
    smile=0.0,
    mouth_width=0.10,
    pucker=0.0,
    size=MESH_SIZE,
) -> List[Landmark]:
    """
    Build a face whose expression metrics equal the given values.

    Defaults describe a relaxed face that classifies as NEUTRAL.
    `smile` is the vertical lift of the mouth corners; the classifier
    adds its wide-mouth bonus on top when mouth_width > 0.15.
    """
    points = [Landmark(0.5, 0.5, 0.0) for _ in range(MESH_SIZE)]

    def put(index, x, y):
        points[index] = Landmark(x, y, 0.0)

    put(1, *nose)
    put(33, *left_eye)
    put(263, *right_eye)
    put(152, *chin)

    # eyelids: top/bottom pairs
    for top, bottom in zip((159, 158, 157, 173), (145, 144, 143, 153)):
        put(top, 0.35, EYE_TOP_Y)
        put(bottom, 0.35, EYE_TOP_Y + left_eye_open)
    for top, bottom in zip((386, 385, 384, 398), (374, 373, 372, 380)):
        put(top, 0.65, EYE_TOP_Y)
        put(bottom, 0.65, EYE_TOP_Y + right_eye_open)

    # eyebrows above the eye tops
    for index in (70, 63, 105):
        put(index, 0.35, EYE_TOP_Y - brow_raise)
    for index in (300, 293, 334):
        put(index, 0.65, EYE_TOP_Y - brow_raise)

    # lips
    put(13, 0.5, MOUTH_Y)
    put(14, 0.5, MOUTH_Y + mouth_open)
    put(12, 0.5, MOUTH_Y)
    put(15, 0.5, MOUTH_Y + mouth_open)
    put(0, 0.5 + pucker, MOUTH_Y - 0.02)
    put(17, 0.5 + pucker, MOUTH_Y + 0.02)
    put(61, 0.5 - mouth_width / 2, MOUTH_Y - smile)
    put(291, 0.5 + mouth_width / 2, MOUTH_Y - smile)

    return points[:size]


@pytest.fixture
def neutral_face():
    return make_face()


@pytest.fixture
def frame_image():
    return np.zeros((120, 160, 3), dtype=np.uint8)


class FakeDetector:
    """Returns queued landmark frames instead of running FaceMesh."""

    def __init__(self, frames: Optional[List[List[Landmark]]] = None):
        self.frames = list(frames or [])
        self.calls = 0
        self.closed = False

    def detect(self, image):
        self.calls += 1
        if self.frames:
            return self.frames.pop(0)
        return []

    def close(self):
        self.closed = True


class FakeCapture:
    """Stands in for cv2.VideoCapture."""

    def __init__(self, frames=None, opened=True):
        self.frames = list(frames or [])
        self.opened = opened
        self.props = {}
        self.released = False

    def isOpened(self):
        return self.opened and not self.released

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


@pytest.fixture
def fake_detector():
    return FakeDetector()
