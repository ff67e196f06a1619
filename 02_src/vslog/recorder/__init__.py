"""Recorder module."""

from .recorder import IRecorder, Recorder

__all__ = ["IRecorder", "Recorder"]
