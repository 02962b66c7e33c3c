"""Filesystem-backed sequences usable as pager loaders.

Each source exposes ``load_anchor``, ``load_next`` and ``load_previous``
coroutines. Neighbours are resolved against the filesystem on every call, so
a file appended after the end was reached shows up on the next fetch.
Blocking I/O runs in a worker thread.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .types import END

logger = logging.getLogger(__name__)


class PageRecord(BaseModel):
    """One page of a file-backed sequence."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    body: str = ""
    position: int = 0


class _Sequence:
    """Shared loader plumbing; subclasses list keys and read records."""

    def __init__(self, *, start: Optional[str] = None, delay: float = 0.0) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.start = start
        self.delay = delay

    def _keys(self) -> list[str]:
        raise NotImplementedError

    def _read(self, key: str, position: int) -> PageRecord:
        raise NotImplementedError

    def _anchor(self) -> PageRecord | Any:
        keys = self._keys()
        if not keys:
            return END
        if self.start is None:
            return self._read(keys[0], 0)
        if self.start not in keys:
            raise KeyError(f"Start key not found: {self.start}")
        return self._read(self.start, keys.index(self.start))

    def _neighbor(self, current: PageRecord, step: int) -> PageRecord | Any:
        keys = self._keys()
        if current.key not in keys:
            raise KeyError(f"Page disappeared: {current.key}")
        position = keys.index(current.key) + step
        if position < 0 or position >= len(keys):
            return END
        return self._read(keys[position], position)

    async def _run(self, fn: Any, *args: Any) -> Any:
        if self.delay:
            await asyncio.sleep(self.delay)
        return await asyncio.to_thread(fn, *args)

    async def load_anchor(self) -> PageRecord | Any:
        return await self._run(self._anchor)

    async def load_next(self, current: PageRecord) -> PageRecord | Any:
        return await self._run(self._neighbor, current, 1)

    async def load_previous(self, current: PageRecord) -> PageRecord | Any:
        return await self._run(self._neighbor, current, -1)


class DirectorySequence(_Sequence):
    """Pages through the regular files of a directory in name order."""

    def __init__(
        self,
        root: Path,
        *,
        pattern: str = "*",
        start: Optional[str] = None,
        delay: float = 0.0,
        encoding: str = "utf-8",
    ) -> None:
        super().__init__(start=start, delay=delay)
        self.root = Path(root)
        self.pattern = pattern
        self.encoding = encoding

    def _keys(self) -> list[str]:
        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root}")
        return sorted(
            path.name
            for path in self.root.glob(self.pattern)
            if path.is_file() and not path.name.startswith(".")
        )

    def _read(self, key: str, position: int) -> PageRecord:
        path = self.root / key
        logger.debug("Reading %s", path)
        body = path.read_text(encoding=self.encoding, errors="replace")
        return PageRecord(key=key, title=key, body=body, position=position)


class LineSequence(_Sequence):
    """Pages through the non-empty lines of a text file.

    Keys are 1-based line numbers rendered as strings, so ``start="3"``
    anchors on the third non-empty line.
    """

    def __init__(
        self,
        path: Path,
        *,
        start: Optional[str] = None,
        delay: float = 0.0,
        encoding: str = "utf-8",
    ) -> None:
        super().__init__(start=start, delay=delay)
        self.path = Path(path)
        self.encoding = encoding

    def _lines(self) -> list[str]:
        text = self.path.read_text(encoding=self.encoding, errors="replace")
        return [line for line in text.splitlines() if line.strip()]

    def _keys(self) -> list[str]:
        return [str(number) for number in range(1, len(self._lines()) + 1)]

    def _read(self, key: str, position: int) -> PageRecord:
        line = self._lines()[int(key) - 1]
        return PageRecord(key=key, title=f"{self.path.name}:{key}", body=line, position=position)
