"""Replay source: envelopes from a newline-delimited JSON file."""

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from domain.schemas import Envelope
from infrastructure.config.models import SourceConfig, SourceKind
from infrastructure.io import ensure_exists
from infrastructure.sources.base import ErrorHandler, StreamSource, StreamSourceError
from infrastructure.sources.envelopes import decode_json
from infrastructure.sources.registry import register_source

logger = logging.getLogger(__name__)


class ReplaySource(StreamSource):
    """
    Replays a captured stream, one JSON envelope (V1 or V2) or gateway batch per line.

    Blank lines are skipped; malformed lines are reported and skipped.
    The source closes at end of file.
    """

    kind = SourceKind.REPLAY

    def __init__(
        self,
        *,
        cfg: SourceConfig,
        path: Path,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        super().__init__(cfg=cfg, on_error=on_error, stop_event=stop_event)
        self.path = path

    @classmethod
    def from_cfg(
        cls,
        cfg: SourceConfig,
        *,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> "ReplaySource":
        if cfg.replay_file is None:
            raise ValueError("ReplaySource requires cfg.replay_file")
        ensure_exists(cfg.replay_file, "replay file")
        return cls(cfg=cfg, path=cfg.replay_file, on_error=on_error, stop_event=stop_event)

    def iter_envelopes(self) -> Iterator[Envelope]:
        logger.info("Replaying envelopes from %s", self.path)
        with self.path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if self.stopped:
                    return
                line = line.strip()
                if not line:
                    continue
                try:
                    envelopes = decode_json(line)
                except ValueError as e:
                    self.report_error(StreamSourceError(f"{self.path}:{lineno}: malformed envelope: {e}"))
                    continue
                yield from envelopes
        logger.info("Replay finished: %s", self.path)


register_source(SourceKind.REPLAY, ReplaySource)
