"""Controller exports for drivegate."""

from __future__ import annotations

from .download import DownloadStream
from .drive_controller import DriveController

__all__ = ["DriveController", "DownloadStream"]
