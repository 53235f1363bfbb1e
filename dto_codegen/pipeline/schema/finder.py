"""
Config file discovery.
"""

from __future__ import annotations

from pathlib import Path

from ...errors import EngineError


class Finder:
    """Collects the config files of one generation run."""

    def collect(self, config_path: str | Path, extension: str) -> list[str]:
        """
        Collect config files.

        A file path is returned as-is. For a directory, ``dto.<extension>``
        at its top level comes first, followed by every other
        ``*.<extension>`` file below it in sorted path order.

        Args:
            config_path: A config file or a directory of config files
            extension: File extension without the dot

        Returns:
            The file paths, in merge order
        """
        path = Path(config_path)
        if path.is_file():
            return [str(path)]
        if not path.is_dir():
            raise EngineError(f"Config path not found: {config_path}")

        main = path / f"dto.{extension}"
        files = [main] if main.is_file() else []
        files += sorted(p for p in path.rglob(f"*.{extension}") if p.is_file() and p != main)

        if not files:
            raise EngineError(f"No `*.{extension}` config files found in {config_path}")
        return [str(p) for p in files]
