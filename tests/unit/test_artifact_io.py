"""
Module 09B - Artifact IO Unit Tests
Tests for orchestrator/artifacts/io.py
"""
import json

import pytest

from orchestrator.artifacts.io import (
    ArtifactIOError,
    ArtifactMissingError,
    claim_path,
    dump_json,
    epoch_path,
    latest_path,
    load_claim_bundle,
    load_epoch_metadata,
    write_epoch_outputs,
)
from orchestrator.pipeline import build_epoch

from fixtures import ADDRESS_A, ADDRESS_D, CHAIN_ID, EPOCH_ID


GENERATED_AT = "2026-01-01T00:00:00.000Z"


@pytest.fixture
def result(scenario_records):
    return build_epoch(scenario_records, chain_id=CHAIN_ID, epoch_id=EPOCH_ID)


class TestDumpJson:
    def test_two_space_indent_and_newline(self):
        assert dump_json({"a": 1}) == '{\n  "a": 1\n}\n'


class TestPaths:
    def test_layout(self, tmp_path):
        assert claim_path(tmp_path, 1, "0xABC") == tmp_path / "claims" / "1" / "0xabc.json"
        assert epoch_path(tmp_path, 1, 9) == tmp_path / "epochs" / "1" / "9.json"
        assert latest_path(tmp_path, 1) == tmp_path / "epochs" / "1" / "latest.json"


class TestWriteEpochOutputs:
    def test_writes_claim_files(self, tmp_path, result):
        written = write_epoch_outputs(result, tmp_path, generated_at=GENERATED_AT)

        path = tmp_path / "claims" / str(CHAIN_ID) / f"{ADDRESS_A}.json"
        assert written[f"claim:{ADDRESS_A}"] == path
        data = json.loads(path.read_text())
        assert list(data) == ["epochId", "amount", "generatedLoss", "proof"]
        assert data["epochId"] == EPOCH_ID
        assert data["amount"] == "100"
        assert data["generatedLoss"] == "1"
        assert len(data["proof"]) == 2
        assert path.read_text().endswith("}\n")

    def test_epoch_and_latest_identical(self, tmp_path, result):
        written = write_epoch_outputs(
            result, tmp_path, input_label="inputs/8453/epoch-7.csv", generated_at=GENERATED_AT
        )
        epoch_text = written["epoch"].read_text()
        assert epoch_text == written["latest"].read_text()

        data = json.loads(epoch_text)
        assert data["chainId"] == CHAIN_ID
        assert data["epochId"] == EPOCH_ID
        assert data["merkleRoot"] == result.root_hex
        assert data["count"] == 4
        assert data["totalAmount"] == "1000"
        assert data["totalGeneratedLoss"] == "10"
        assert data["input"] == "inputs/8453/epoch-7.csv"
        assert data["generatedAt"] == GENERATED_AT

    def test_reload_round_trip(self, tmp_path, result):
        written = write_epoch_outputs(result, tmp_path)
        bundle = load_claim_bundle(written[f"claim:{ADDRESS_D}"])
        meta = load_epoch_metadata(written["epoch"])

        assert bundle == result.claim_bundles()[ADDRESS_D]
        assert meta.merkle_root == result.root_hex


class TestLoadErrors:
    def test_missing_claim(self, tmp_path):
        with pytest.raises(ArtifactMissingError):
            load_claim_bundle(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ArtifactIOError, match="Invalid JSON"):
            load_epoch_metadata(path)

    def test_invalid_shape(self, tmp_path):
        path = tmp_path / "claim.json"
        path.write_text(json.dumps({"epochId": 1, "amount": 5}))
        with pytest.raises(ArtifactIOError, match="Invalid claim bundle"):
            load_claim_bundle(path)
