"""
Capture and landmark model collaborators.
"""
# Not imported here so landmark classification works without mediapipe loaded.
# Use face_emoji.core.camera / face_emoji.core.face_detector directly.
