"""
Terminal progress bar for the transfer loop.
"""

from typing import Any, Optional

import click

from ..models.artifacts import ArtifactRef
from ..models.results import TransferOutcome
from ..utils.constants import PROGRESS_BAR_WIDTH


class ClickProgress:
    """Progress renderer backed by ``click.progressbar``."""

    def __init__(self, label: str = "Pushing:", width: int = PROGRESS_BAR_WIDTH, file: Optional[Any] = None) -> None:
        self.label = label
        self.width = width
        self.file = file
        self._bar: Optional[Any] = None

    def start(self, total: int) -> None:
        self._bar = click.progressbar(
            length=total,
            label=self.label,
            width=self.width,
            show_pos=True,
            show_percent=True,
            file=self.file,
        )
        self._bar.__enter__()

    def advance(self, ref: ArtifactRef, outcome: TransferOutcome) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.__exit__(None, None, None)
            self._bar = None


__all__ = ["ClickProgress"]
