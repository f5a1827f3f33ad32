"""Local document store — reads development-mode collections from JSON files.

Each collection lives in `<db_dir>/<collection>.json` as a JSON array of
documents. This is the fetcher side of collection validation: it only reads.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

import structlog
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

logger = structlog.get_logger()

# Async function returning a collection's raw documents (or None when absent)
Fetcher = Callable[[], Awaitable[Any]]


class LocalDbError(Exception):
    """A collection file exists but cannot be decoded."""

    def __init__(self, message: str, *, collection: Optional[str] = None, path: Optional[str] = None):
        self.collection = collection
        self.path = path
        super().__init__(message)


def _is_transient(exc: BaseException) -> bool:
    # A missing file is an answer, not a transient failure
    return isinstance(exc, OSError) and not isinstance(exc, (FileNotFoundError, IsADirectoryError))


class LocalDbClient:
    """Read-only access to the JSON files of the local document store."""

    def __init__(self, db_dir: Union[str, Path]):
        self.db_dir = Path(db_dir)

    def _path(self, collection: str) -> Path:
        return self.db_dir / f"{collection}.json"

    async def get_users(self) -> Optional[Any]:
        return await self.read_collection("users")

    async def get_patients(self) -> Optional[Any]:
        return await self.read_collection("patients")

    async def get_doctors(self) -> Optional[Any]:
        return await self.read_collection("doctors")

    async def get_appointments(self) -> Optional[Any]:
        return await self.read_collection("appointments")

    async def get_notifications(self) -> Optional[Any]:
        return await self.read_collection("notifications")

    async def read_collection(self, collection: str) -> Optional[Any]:
        """Read and decode one collection file.

        Returns:
            The decoded JSON value, or None when the file does not exist

        Raises:
            LocalDbError: The file is not valid JSON
            OSError: The file could not be read after retries
        """
        path = self._path(collection)
        try:
            raw = await self._read_text(path)
        except FileNotFoundError:
            logger.warning("local_db_file_missing", collection=collection, path=str(path))
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise LocalDbError(
                f"Malformed JSON in {path.name}: {e}",
                collection=collection,
                path=str(path),
            ) from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
        retry=retry_if_exception(_is_transient),
        reraise=True,
        before_sleep=lambda retry_state: logger.warning(
            "local_db_read_retry",
            attempt=retry_state.attempt_number,
            wait=retry_state.next_action.sleep,
        ),
    )
    async def _read_text(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    def is_available(self) -> bool:
        """True when the store directory exists."""
        return self.db_dir.is_dir()


def collection_fetchers(client: LocalDbClient) -> dict[str, Fetcher]:
    """Closed lookup table from collection name to its fetch function."""
    return {
        "users": client.get_users,
        "patients": client.get_patients,
        "doctors": client.get_doctors,
        "appointments": client.get_appointments,
        "notifications": client.get_notifications,
    }
