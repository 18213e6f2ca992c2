from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .config import AppSettings, get_settings
from .results import ErrorKind, Result

logger = logging.getLogger(__name__)

XML_PATTERN = "*.xml"


def _write_bytes(path: Path, data: bytes) -> None:
    with path.open("wb") as handle:
        handle.write(data)


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


class XmlFileStore:
    """Saved XML documents kept as plain files in one base directory.

    File names are joined onto the base directory as given; they are not
    sanitized against ``..`` or absolute paths.
    """

    def __init__(self, base_dir: Path | str) -> None:
        self._base_path = Path(base_dir).expanduser().resolve()

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> XmlFileStore:
        settings = settings or get_settings()
        return cls(settings.storage_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    async def save(self, file_name: str, content: str) -> Result[Path]:
        if not file_name:
            return Result.failure(ErrorKind.VALIDATION, "Filename is required")
        file_path = self._full_path(file_name)
        try:
            # Encode before opening the file; an unencodable payload leaves old content intact
            data = content.encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.warning("Refusing to save %s: %s", file_path, exc)
            return Result.failure(ErrorKind.IO, f"Content is not valid UTF-8 text: {exc.reason}")
        try:
            await asyncio.to_thread(self._base_path.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(_write_bytes, file_path, data)
        except OSError as exc:
            logger.warning("Failed to save %s: %s", file_path, exc)
            return Result.failure(ErrorKind.IO, str(exc))
        logger.info("Saved XML file %s (%d chars)", file_path, len(content))
        return Result.success(file_path)

    async def load(self, file_name: str) -> Result[str]:
        if not file_name:
            return Result.failure(ErrorKind.VALIDATION, "Filename is required")
        file_path = self._full_path(file_name)
        try:
            content = await asyncio.to_thread(_read_text, file_path)
        except (FileNotFoundError, IsADirectoryError):
            logger.info("Stored file missing on disk: %s", file_path)
            return Result.failure(ErrorKind.NOT_FOUND, "File not found")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to load %s: %s", file_path, exc)
            return Result.failure(ErrorKind.IO, str(exc))
        return Result.success(content)

    async def list_files(self) -> Result[list[str]]:
        """Return names of saved ``.xml`` files in directory enumeration order."""
        try:
            names = await asyncio.to_thread(self._xml_file_names)
        except OSError as exc:
            logger.warning("Failed to list %s: %s", self._base_path, exc)
            return Result.failure(ErrorKind.IO, str(exc))
        return Result.success(names)

    def _xml_file_names(self) -> list[str]:
        if not self._base_path.is_dir():
            return []
        return [path.name for path in self._base_path.glob(XML_PATTERN) if path.is_file()]

    def _full_path(self, file_name: str) -> Path:
        return self._base_path / file_name


__all__ = ["XML_PATTERN", "XmlFileStore"]
