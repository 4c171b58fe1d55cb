from unittest.mock import patch, MagicMock
import pytest
from pydantic import ValidationError

from storagekit import new_storage, Project, StorageConfig
from storagekit.base import CloudStorageBlueprint


class TestNewStorage:
    @patch("storagekit.gcp.project.gcs")
    def test_dict_config(self, mock_gcs):
        mock_gcs.Client.return_value = MagicMock()
        result = new_storage({"project_id": "p"})
        assert isinstance(result, CloudStorageBlueprint)
        assert isinstance(result, Project)
        mock_gcs.Client.assert_called_once_with(project="p", credentials=None)

    @patch("storagekit.gcp.project.gcs")
    def test_model_config(self, mock_gcs):
        cfg = StorageConfig(project_id="p")
        assert new_storage(cfg).config is cfg

    @patch("storagekit.gcp.project.gcs")
    def test_env_config(self, mock_gcs, monkeypatch):
        monkeypatch.setenv("STORAGE_PROJECT", "env-proj")
        assert new_storage().project_id == "env-proj"

    def test_invalid_config(self):
        with pytest.raises(ValidationError):
            new_storage({"project_id": "p", "unknown": 1})
