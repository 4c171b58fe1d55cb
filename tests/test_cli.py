import json
from unittest.mock import patch, MagicMock
import pytest

from storagekit.cli import main


@pytest.fixture
def project():
    with patch("storagekit.factory.Project") as mock_project:
        instance = MagicMock()
        mock_project.return_value = instance
        yield instance


CONFIG = ["--config", '{"project_id": "p"}']


class TestCli:
    def test_list_result_printed_as_json(self, project, capsys):
        project.list_buckets.return_value = ["a", "b"]
        main(CONFIG + ["list-buckets"])
        assert json.loads(capsys.readouterr().out) == ["a", "b"]

    def test_positional_and_keyword_args(self, project, capsys):
        project.signed_url.return_value = "https://signed"
        main(CONFIG + ["signed-url", "bucket", "path.png", "--kwargs", '{"method": "PUT"}'])
        project.signed_url.assert_called_once_with("bucket", "path.png", method="PUT")
        assert capsys.readouterr().out.strip() == "https://signed"

    def test_none_prints_ok(self, project, capsys):
        project.delete_bucket.return_value = None
        main(CONFIG + ["delete-bucket", "old"])
        assert capsys.readouterr().out.strip() == "OK"

    def test_bad_config_json(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--config", "{nope", "list-buckets"])
        assert exc.value.code == 1
        assert "Invalid --config JSON" in capsys.readouterr().err

    def test_bad_kwargs_json(self, capsys):
        with pytest.raises(SystemExit):
            main(CONFIG + ["list-buckets", "--kwargs", "["])
        assert "Invalid --kwargs JSON" in capsys.readouterr().err

    def test_invalid_config(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["list-buckets"])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_operation(self, capsys):
        with patch("storagekit.factory.Project") as mock_project:
            mock_project.return_value = object()
            with pytest.raises(SystemExit):
                main(CONFIG + ["frobnicate"])
        assert "Unknown operation" in capsys.readouterr().err

    def test_private_operation_rejected(self, project, capsys):
        with pytest.raises(SystemExit):
            main(CONFIG + ["_call"])
        assert "Unknown operation" in capsys.readouterr().err

    def test_operation_failure(self, project, capsys):
        project.signed_url.side_effect = RuntimeError("boom")
        with pytest.raises(SystemExit) as exc:
            main(CONFIG + ["signed-url", "b", "o"])
        assert exc.value.code == 1
        assert "Operation failed: boom" in capsys.readouterr().err
