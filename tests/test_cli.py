import json
from functools import partial

from botocore.exceptions import ClientError
from typer.testing import CliRunner

from riftcatalog import cli
from riftcatalog.publisher import publish_catalog
from riftcatalog.utils import PublishError

runner = CliRunner()


def test_transform_writes_dataset_and_manifest(tmp_path, dump_file):
    out_dir = tmp_path / "data"

    result = runner.invoke(cli.app, ["transform", "--dump", str(dump_file), "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert "Wrote 3 cards to" in result.output
    assert "Wrote 3 image entries to" in result.output
    dataset = json.loads((out_dir / "cards.enriched.json").read_text(encoding="utf8"))
    assert dataset["totalCards"] == 3


def test_transform_missing_dump_exits_with_error(tmp_path):
    result = runner.invoke(
        cli.app,
        ["transform", "--dump", str(tmp_path / "missing.json"), "--out-dir", str(tmp_path / "data")],
    )

    assert result.exit_code == 1
    assert "Cannot find champion dump" in result.output


def test_publish_without_table_fails(tmp_path, monkeypatch):
    monkeypatch.delenv("CARD_CATALOG_TABLE", raising=False)

    result = runner.invoke(cli.app, ["publish", "--source", str(tmp_path / "cards.json")])

    assert result.exit_code == 1
    assert "Card upload failed." in result.output
    assert "CARD_CATALOG_TABLE" in result.output


def test_publish_passes_overrides_to_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CARD_CATALOG_TABLE", "from-env")
    seen = []

    def fake_publish(config):
        seen.append(config)
        return 12

    monkeypatch.setattr(cli, "publish_catalog", fake_publish)

    result = runner.invoke(cli.app, ["publish", "--table", "cards", "--region", "eu-west-1"])

    assert result.exit_code == 0, result.output
    assert "Uploaded 12 cards to cards" in result.output
    assert seen[0].table_name == "cards"
    assert seen[0].region == "eu-west-1"


def test_publish_reports_batch_failure(monkeypatch):
    monkeypatch.setenv("CARD_CATALOG_TABLE", "cards")

    def fake_publish(config):
        raise PublishError("Failed to write 2 items after 5 attempts")

    monkeypatch.setattr(cli, "publish_catalog", fake_publish)

    result = runner.invoke(cli.app, ["publish"])

    assert result.exit_code == 1
    assert "Failed to write 2 items" in result.output


def test_taxonomy_command_writes_index(tmp_path, dump_file):
    out_dir = tmp_path / "data"
    runner.invoke(cli.app, ["transform", "--dump", str(dump_file), "--out-dir", str(out_dir)])

    result = runner.invoke(
        cli.app,
        ["taxonomy", "--source", str(out_dir / "cards.enriched.json"), "--out-dir", str(out_dir)],
    )

    assert result.exit_code == 0, result.output
    taxonomy = json.loads((out_dir / "effect-taxonomy.json").read_text(encoding="utf8"))
    assert taxonomy["totalCards"] == 3


def test_sync_images_missing_manifest_fails(tmp_path):
    result = runner.invoke(cli.app, ["sync-images", "--manifest", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "Unable to locate" in result.output


def test_publish_reports_store_errors_without_traceback(tmp_path, monkeypatch):
    monkeypatch.setenv("CARD_CATALOG_TABLE", "cards")
    source = tmp_path / "cards.enriched.json"
    source.write_text(json.dumps({"cards": [{"id": "c1", "slug": "c1"}]}), encoding="utf8")

    class DeniedClient:
        def batch_write_item(self, RequestItems):
            raise ClientError(
                {"Error": {"Code": "AccessDeniedException", "Message": "not authorized"}},
                "BatchWriteItem",
            )

    monkeypatch.setattr(
        cli, "publish_catalog", partial(publish_catalog, client_factory=lambda region: DeniedClient())
    )

    result = runner.invoke(cli.app, ["publish", "--source", str(source)])

    assert result.exit_code == 1
    assert "Card upload failed." in result.output
    assert "ERROR: Batch write to cards failed" in result.output
    assert not isinstance(result.exception, ClientError)
