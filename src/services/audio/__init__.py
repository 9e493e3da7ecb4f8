"""
Audio module - Capture of voice notes to per-transaction files.
"""

from .capture import AudioCapture, FileAudioCapture, discard_recording, recording_path

__all__ = ["AudioCapture", "FileAudioCapture", "discard_recording", "recording_path"]
