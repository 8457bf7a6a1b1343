"""Unit tests for key-value persistence adapters."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from hotel_admin_console.repositories.kv_store import (
    DynamoDBKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)


@pytest.mark.unit
class TestInMemoryKeyValueStore:
    """Test suite for InMemoryKeyValueStore."""

    def test_load_absent_key_returns_none(self) -> None:
        """Test that an unknown key loads as None."""
        assert InMemoryKeyValueStore().load("hotels") is None

    def test_save_then_load(self) -> None:
        """Test that a saved value is returned unchanged."""
        store = InMemoryKeyValueStore()

        assert store.save("hotels", "[]") is True
        assert store.load("hotels") == "[]"

    def test_remove(self) -> None:
        """Test that remove deletes the key and tolerates absent keys."""
        store = InMemoryKeyValueStore({"hotel_admin_auth": "true"})

        assert store.remove("hotel_admin_auth") is True
        assert store.load("hotel_admin_auth") is None
        assert store.remove("hotel_admin_auth") is True


@pytest.mark.unit
class TestJsonFileKeyValueStore:
    """Test suite for JsonFileKeyValueStore."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Test that the storage directory is created on init."""
        directory = tmp_path / "nested" / "data"
        JsonFileKeyValueStore(directory)

        assert directory.is_dir()

    def test_save_writes_one_file_per_key(self, tmp_path: Path) -> None:
        """Test that each key is stored as <key>.json."""
        store = JsonFileKeyValueStore(tmp_path)

        assert store.save("menus", '[{"id": "m1"}]') is True
        assert (tmp_path / "menus.json").read_text(encoding="utf-8") == '[{"id": "m1"}]'

    def test_load_absent_key_returns_none(self, tmp_path: Path) -> None:
        """Test that a missing file loads as None."""
        assert JsonFileKeyValueStore(tmp_path).load("hotels") is None

    def test_save_overwrites_previous_value(self, tmp_path: Path) -> None:
        """Test that saving replaces the previous blob and leaves no temp files."""
        store = JsonFileKeyValueStore(tmp_path)
        store.save("hotels", "old")
        store.save("hotels", "new")

        assert store.load("hotels") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["hotels.json"]

    def test_remove_deletes_file(self, tmp_path: Path) -> None:
        """Test that remove deletes the file and tolerates absent keys."""
        store = JsonFileKeyValueStore(tmp_path)
        store.save("hotel_admin_auth", "true")

        assert store.remove("hotel_admin_auth") is True
        assert not (tmp_path / "hotel_admin_auth.json").exists()
        assert store.remove("hotel_admin_auth") is True

    def test_save_failure_returns_false(self, tmp_path: Path) -> None:
        """Test that an OS error while writing is reported as False."""
        store = JsonFileKeyValueStore(tmp_path)

        with patch(
            "hotel_admin_console.repositories.kv_store.tempfile.mkstemp",
            side_effect=OSError("disk full"),
        ):
            assert store.save("hotels", "[]") is False

    def test_failed_replace_removes_temp_file(self, tmp_path: Path) -> None:
        """Test that no temp file is left behind when the final rename fails."""
        store = JsonFileKeyValueStore(tmp_path)
        store.save("hotels", "[]")

        with patch(
            "hotel_admin_console.repositories.kv_store.os.replace",
            side_effect=OSError("read-only file system"),
        ):
            assert store.save("hotels", '[{"id": "h1"}]') is False

        assert sorted(p.name for p in tmp_path.iterdir()) == ["hotels.json"]
        assert store.load("hotels") == "[]"


@pytest.mark.unit
class TestDynamoDBKeyValueStore:
    """Test suite for DynamoDBKeyValueStore."""

    @pytest.fixture
    def mock_dynamodb(self) -> MagicMock:
        """Create a mock DynamoDB resource."""
        return MagicMock()

    @pytest.fixture
    def store(self, mock_dynamodb: MagicMock) -> DynamoDBKeyValueStore:
        """Create a DynamoDBKeyValueStore with mocked DynamoDB."""
        return DynamoDBKeyValueStore(dynamodb_resource=mock_dynamodb, table_name="test-kv")

    @staticmethod
    def _client_error(operation: str) -> ClientError:
        return ClientError(
            {"Error": {"Code": "InternalServerError", "Message": "Server error"}}, operation
        )

    def test_store_initialization(self, mock_dynamodb: MagicMock) -> None:
        """Test that the store binds to the named table."""
        store = DynamoDBKeyValueStore(dynamodb_resource=mock_dynamodb, table_name="kv-table")

        assert store.table_name == "kv-table"
        mock_dynamodb.Table.assert_called_once_with("kv-table")

    def test_load_success(self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock) -> None:
        """Test loading an existing blob."""
        mock_dynamodb.Table.return_value.get_item.return_value = {
            "Item": {"key": "hotels", "value": "[]"}
        }

        assert store.load("hotels") == "[]"
        mock_dynamodb.Table.return_value.get_item.assert_called_once_with(Key={"key": "hotels"})

    def test_load_not_found(self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock) -> None:
        """Test that a missing item loads as None."""
        mock_dynamodb.Table.return_value.get_item.return_value = {}

        assert store.load("hotels") is None

    def test_load_dynamodb_error(
        self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock
    ) -> None:
        """Test that DynamoDB errors load as None."""
        mock_dynamodb.Table.return_value.get_item.side_effect = self._client_error("GetItem")

        assert store.load("hotels") is None

    def test_save_success(self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock) -> None:
        """Test saving a blob."""
        assert store.save("menus", "[]") is True
        mock_dynamodb.Table.return_value.put_item.assert_called_once_with(
            Item={"key": "menus", "value": "[]"}
        )

    def test_save_dynamodb_error(
        self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock
    ) -> None:
        """Test that save returns False on DynamoDB error."""
        mock_dynamodb.Table.return_value.put_item.side_effect = self._client_error("PutItem")

        assert store.save("menus", "[]") is False

    def test_remove_success(self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock) -> None:
        """Test removing a blob."""
        assert store.remove("hotel_admin_auth") is True
        mock_dynamodb.Table.return_value.delete_item.assert_called_once_with(
            Key={"key": "hotel_admin_auth"}
        )

    def test_remove_dynamodb_error(
        self, store: DynamoDBKeyValueStore, mock_dynamodb: MagicMock
    ) -> None:
        """Test that remove returns False on DynamoDB error."""
        mock_dynamodb.Table.return_value.delete_item.side_effect = self._client_error(
            "DeleteItem"
        )

        assert store.remove("hotel_admin_auth") is False
