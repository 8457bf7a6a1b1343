"""Key-value persistence adapters.

These adapters store and return opaque string blobs under fixed keys. They know
nothing about the hotel/menu schema. Following the repository convention, we
use simple return values (None/False) for expected failures rather than
raising exceptions.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)

HOTELS_KEY = "hotels"
MENUS_KEY = "menus"
SESSION_KEY = "hotel_admin_auth"


class KeyValueStore(ABC):
    """Abstract synchronous key-value blob store.

    - load returns None when the key is absent or unreadable
    - save and remove return False on failure
    """

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Load the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if absent or unreadable
        """

    @abstractmethod
    def save(self, key: str, value: str) -> bool:
        """Store a blob under a key, replacing any previous value.

        Args:
            key: Storage key
            value: String to store

        Returns:
            bool: True if save succeeded, False otherwise
        """

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove the blob stored under a key. Removing an absent key succeeds.

        Args:
            key: Storage key

        Returns:
            bool: True if remove succeeded, False otherwise
        """


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and ephemeral runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    def remove(self, key: str) -> bool:
        self.data.pop(key, None)
        return True


class JsonFileKeyValueStore(KeyValueStore):
    """Store each key as ``<key>.json`` inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize the store, creating the directory if needed.

        Args:
            directory: Directory holding one file per key
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            return path.read_text(encoding="utf-8")

        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

    def save(self, key: str, value: str) -> bool:
        path = self._path(key)
        tmp_name: str | None = None
        try:
            # Previous blob stays intact until the replace
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
            return True

        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False

    def remove(self, key: str) -> bool:
        try:
            self._path(key).unlink(missing_ok=True)
            return True

        except OSError as e:
            logger.error(f"Failed to remove {key}: {e}")
            return False


class DynamoDBKeyValueStore(KeyValueStore):
    """Store blobs as items in a DynamoDB table.

    Each item has ``key`` as partition key and the blob in a ``value`` attribute.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize store.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def load(self, key: str) -> str | None:
        try:
            response = self.table.get_item(Key={"key": key})

            if "Item" not in response:
                return None

            value = response["Item"].get("value")
            return value if isinstance(value, str) else None

        except ClientError as e:
            logger.error(f"Failed to load {key} from DynamoDB: {e}")
            return None

    def save(self, key: str, value: str) -> bool:
        try:
            self.table.put_item(Item={"key": key, "value": value})
            return True

        except ClientError as e:
            logger.error(f"Failed to save {key} to DynamoDB: {e}")
            return False

    def remove(self, key: str) -> bool:
        try:
            self.table.delete_item(Key={"key": key})
            return True

        except ClientError as e:
            logger.error(f"Failed to remove {key} from DynamoDB: {e}")
            return False
