"""Face mesh landmark indices and system constants"""

from typing import Dict, List

# MediaPipe FaceMesh without iris refinement
FACE_MESH_SIZE = 468

# Head direction reference points
DIRECTION_LANDMARKS: Dict[str, int] = {
    'nose_tip': 1,
    'left_eye': 33,
    'right_eye': 263,
    'chin': 152,
}

MOUTH_LANDMARKS: Dict[str, int] = {
    'upper_lip_outer': 13,
    'lower_lip_outer': 14,
    'upper_lip_inner': 12,
    'lower_lip_inner': 15,
    'upper_lip_center': 0,
    'lower_lip_center': 17,
    'left_corner': 61,
    'right_corner': 291,
}

EYEBROW_LANDMARKS: Dict[str, Dict[str, object]] = {
    'left': {
        'brow': [70, 63, 105],
        'eye_top': 159,
    },
    'right': {
        'brow': [300, 293, 334],
        'eye_top': 386,
    },
}

# Paired eyelid points, top[i] matches bottom[i]
EYE_OPENNESS_LANDMARKS: Dict[str, Dict[str, List[int]]] = {
    'left': {
        'top': [159, 158, 157, 173],
        'bottom': [145, 144, 143, 153],
    },
    'right': {
        'top': [386, 385, 384, 398],
        'bottom': [374, 373, 372, 380],
    },
}

# Key points drawn on the overlay
OVERLAY_LANDMARK_INDICES: List[int] = [
    # nose
    1, 2, 98, 327,
    # left eye
    33, 7, 163, 144, 145, 153, 154, 155, 133, 173, 157, 158, 159, 160, 161, 246,
    # right eye
    362, 382, 381, 380, 374, 373, 390, 249, 263, 466, 388, 387, 386, 385, 384, 398,
    # left eyebrow
    70, 63, 105, 66, 107, 55, 65, 52, 53, 46,
    # right eyebrow
    300, 293, 334, 296, 336, 285, 295, 282, 283, 276,
    # mouth outer
    61, 185, 40, 39, 37, 0, 267, 269, 270, 409, 291,
    308, 415, 310, 311, 312, 13, 82, 81, 80, 191, 78,
    # mouth inner
    78, 95, 88, 178, 87, 14, 317, 402, 318, 324, 308,
    # face outline
    10, 338, 297, 332, 284, 251, 389, 356, 454, 323, 361, 288,
    397, 365, 379, 378, 400, 377, 152, 148, 176, 149, 150, 136,
    172, 58, 132, 93, 234, 127, 162, 21, 54, 103, 67, 109,
    # cheeks
    205, 425, 206, 203, 36, 266, 423, 426,
    # chin
    152, 175, 171, 140, 194, 201, 200, 421, 418, 369, 395, 394,
]

# Guards the head tilt slope against a zero eye distance
TILT_EPSILON = 1e-4

# Reported when a face is present; FaceMesh gives no per-face score
DETECTED_CONFIDENCE = 1.0

DEFAULT_DIRECTION_THRESHOLD = 0.05
DEFAULT_BORDER_COLORS: Dict[str, str] = {
    'center': '#667eea',
    'left': '#2196F3',
    'right': '#FF9800',
    'up': '#9C27B0',
    'down': '#F44336',
}
