"""Session-scoped logs of ambient browser events."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from playwright.async_api import Download

T = TypeVar("T")


class EventLog(Generic[T]):
    """Ordered, append-only record of events observed during a session."""

    def __init__(self) -> None:
        self._items: list[T] = []

    def append(self, item: T) -> None:
        self._items.append(item)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Check whether any recorded event satisfies ``predicate``."""
        return any(predicate(item) for item in self._items)

    def last(self) -> T | None:
        return self._items[-1] if self._items else None

    def snapshot(self) -> list[T]:
        """Copy of the recorded events, oldest first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))


class DownloadCapture:
    """Handle to a download observed by ``BrowserSession.expect_download``.

    Attributes:
        download: Playwright download, set once the event has fired
    """

    def __init__(self) -> None:
        self.download: Download | None = None

    def _require(self) -> Download:
        if self.download is None:
            raise RuntimeError("Download not captured yet; read it after the expect_download block")
        return self.download

    @property
    def suggested_filename(self) -> str:
        return self._require().suggested_filename

    async def save_as(self, path: Path) -> Path:
        """Write the downloaded bytes to ``path``.

        Returns:
            The path written
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        await self._require().save_as(path)
        return path
