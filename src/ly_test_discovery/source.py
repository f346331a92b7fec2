from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ReadError
from .events import EventBroadcaster, SourceEvent

logger = logging.getLogger(__name__)

__all__ = ["PathLike", "SourceLoader", "read_source"]

PathLike = Union[str, os.PathLike]


def read_source(path: Path) -> str:
    """Read a feature file as UTF-8 without translating line endings."""
    return path.read_bytes().decode("utf-8")


@dataclass
class SourceLoader:
    """Read feature files and publish them as ``source`` events."""

    broadcaster: EventBroadcaster

    async def load(self, path: PathLike) -> SourceEvent:
        uri = Path(path).as_posix()
        try:
            data = await asyncio.to_thread(read_source, Path(path))
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(uri, str(e)) from e
        logger.debug("Loaded %s (%d characters)", uri, len(data))
        event = SourceEvent(uri=uri, data=data)
        self.broadcaster.emit(SourceEvent.type, event)
        return event
