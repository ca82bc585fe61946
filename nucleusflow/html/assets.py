"""Read-through byte cache backing static asset copies."""

from __future__ import annotations

import logging
from pathlib import Path

from nucleusflow._locking import ReadWriteLock
from nucleusflow.errors import AssetIOError

LOGGER = logging.getLogger(__name__)


class AssetCache:
    """Cache asset file contents by source path.

    Entries are loaded on first use and kept until :meth:`clear` is called;
    there is no eviction. The cache is safe to share between threads.
    """

    def __init__(self) -> None:
        self._entries: dict[Path, bytes] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def is_cached(self, path: Path) -> bool:
        """Return ``True`` when ``path`` has been loaded into the cache."""
        with self._lock.read():
            return Path(path) in self._entries

    def cached_paths(self) -> list[Path]:
        """Return the cached source paths in insertion order."""
        with self._lock.read():
            return list(self._entries)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock.write():
            self._entries.clear()

    def read(self, path: Path) -> bytes:
        """Return the bytes of ``path``, loading and caching them on a miss.

        Raises
        ------
        AssetIOError
            If the file cannot be read.
        """
        key = Path(path)
        with self._lock.read():
            cached = self._entries.get(key)
        if cached is not None:
            return cached
        try:
            payload = key.read_bytes()
        except OSError as exc:
            msg = "Cannot read asset"
            raise AssetIOError(msg, key) from exc
        with self._lock.write():
            return self._entries.setdefault(key, payload)

    def copy_assets(self, asset_dir: Path, output_dir: Path) -> list[Path]:
        """Copy files directly under ``asset_dir`` into ``output_dir``.

        Sub-directories are not descended into. Each file keeps its path
        relative to ``asset_dir``; parent directories are created as needed.

        Parameters
        ----------
        asset_dir : Path
            Directory whose files are copied.
        output_dir : Path
            Destination root for the copies.

        Returns
        -------
        list[Path]
            Destination paths written, in sorted source order.

        Raises
        ------
        AssetIOError
            If the directory cannot be listed or a copy cannot be written.
        """
        try:
            sources = sorted(entry for entry in asset_dir.iterdir() if entry.is_file())
        except OSError as exc:
            msg = "Cannot list asset directory"
            raise AssetIOError(msg, asset_dir) from exc

        written: list[Path] = []
        for source in sources:
            payload = self.read(source)
            target = output_dir / source.relative_to(asset_dir)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(payload)
            except OSError as exc:
                msg = "Cannot write asset copy"
                raise AssetIOError(msg, target) from exc
            written.append(target)
        LOGGER.debug("copied %d asset(s) into %s", len(written), output_dir)
        return written


__all__ = ["AssetCache"]
