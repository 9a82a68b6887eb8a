"""
Module 09B - Epoch Input Unit Tests
Tests for orchestrator/artifacts/inputs.py
"""
import pytest

from core.crypto.packed import UINT256_MAX
from core.schemas.errors import InputValidationException
from orchestrator.artifacts.inputs import (
    candidate_input_paths,
    parse_records,
    read_records_csv,
    resolve_input_csv,
)

from fixtures import ADDRESS_A, ADDRESS_B, csv_text


def write(tmp_path, text, name="epoch.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReadRecordsCsv:
    """Happy paths."""

    def test_reads_rows_in_file_order(self, tmp_path):
        path = write(tmp_path, csv_text([(ADDRESS_B, 200, 2), (ADDRESS_A, 100, 1)]))
        records = read_records_csv(path)

        assert [r.address for r in records] == [ADDRESS_B, ADDRESS_A]
        assert records[0].amount == 200
        assert records[0].generated_loss == 2

    def test_header_case_insensitive_and_trimmed(self, tmp_path):
        text = " Address , AMOUNT ,generatedloss\n" + f" {ADDRESS_A} , 5 , 6 \n"
        records = read_records_csv(write(tmp_path, text))
        assert (records[0].address, records[0].amount, records[0].generated_loss) == (ADDRESS_A, 5, 6)

    def test_column_order_follows_header(self, tmp_path):
        text = f"generatedLoss,address,amount\n7,{ADDRESS_A},8\n"
        record = read_records_csv(write(tmp_path, text))[0]
        assert (record.amount, record.generated_loss) == (8, 7)

    def test_address_lowercased(self, tmp_path):
        text = csv_text([("0x" + "AB" * 20, 1, 1)])
        assert read_records_csv(write(tmp_path, text))[0].address == "0x" + "ab" * 20

    def test_empty_amount_defaults_to_zero(self, tmp_path):
        text = f"address,amount,generatedLoss\n{ADDRESS_A},,3\n"
        record = read_records_csv(write(tmp_path, text))[0]
        assert record.amount == 0
        assert record.generated_loss == 3

    def test_blank_lines_skipped(self, tmp_path):
        text = f"address,amount,generatedLoss\n\n{ADDRESS_A},1,1\n\n{ADDRESS_B},2,2\n"
        assert len(read_records_csv(write(tmp_path, text))) == 2

    def test_uint256_max_accepted(self, tmp_path):
        text = csv_text([(ADDRESS_A, UINT256_MAX, 0)])
        assert read_records_csv(write(tmp_path, text))[0].amount == UINT256_MAX


class TestReadRecordsCsvErrors:
    """Malformed input is rejected with the file line."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputValidationException, match="Missing input CSV"):
            read_records_csv(tmp_path / "absent.csv")

    def test_header_only(self, tmp_path):
        with pytest.raises(InputValidationException, match="at least 1 row"):
            read_records_csv(write(tmp_path, "address,amount,generatedLoss\n"))

    def test_missing_column(self, tmp_path):
        with pytest.raises(InputValidationException, match="header must include") as exc_info:
            read_records_csv(write(tmp_path, f"address,amount\n{ADDRESS_A},1\n"))
        assert exc_info.value.details["field_path"] == "generatedloss"

    def test_bad_address(self, tmp_path):
        with pytest.raises(InputValidationException, match="Bad address on line 2: 0x1234") as exc_info:
            read_records_csv(write(tmp_path, csv_text([("0x1234", 1, 1)])))
        assert exc_info.value.line == 2

    @pytest.mark.parametrize("amount", ["-1", "1.5", "1e3", "abc"])
    def test_bad_amount(self, tmp_path, amount):
        with pytest.raises(InputValidationException, match="Bad amount on line 2"):
            read_records_csv(write(tmp_path, csv_text([(ADDRESS_A, amount, 0)])))

    def test_bad_generated_loss_line_counts_blank_lines(self, tmp_path):
        text = f"address,amount,generatedLoss\n{ADDRESS_A},1,1\n\n{ADDRESS_B},1,x\n"
        with pytest.raises(InputValidationException, match="Bad generatedLoss on line 4") as exc_info:
            read_records_csv(write(tmp_path, text))
        assert exc_info.value.line == 4

    def test_amount_overflow(self, tmp_path):
        with pytest.raises(InputValidationException, match="line 2"):
            read_records_csv(write(tmp_path, csv_text([(ADDRESS_A, UINT256_MAX + 1, 0)])))

    def test_parse_records_requires_data(self):
        with pytest.raises(InputValidationException):
            parse_records([["address", "amount", "generatedLoss"]])


class TestResolveInputCsv:
    """inputs/<chain>/epoch-<n>.csv, then input/<chain>/epoch-<n>.csv, then input/<chain>/<n>.csv"""

    def touch(self, path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x")
        return path

    def test_candidate_order(self, tmp_path):
        paths = candidate_input_paths(tmp_path, 10, 3)
        assert paths == [
            tmp_path / "inputs" / "10" / "epoch-3.csv",
            tmp_path / "input" / "10" / "epoch-3.csv",
            tmp_path / "input" / "10" / "3.csv",
        ]

    def test_prefers_inputs_dir(self, tmp_path):
        preferred = self.touch(tmp_path / "inputs" / "10" / "epoch-3.csv")
        self.touch(tmp_path / "input" / "10" / "epoch-3.csv")
        assert resolve_input_csv(tmp_path, 10, 3) == preferred

    def test_falls_back_to_input_dir(self, tmp_path):
        fallback = self.touch(tmp_path / "input" / "10" / "epoch-3.csv")
        assert resolve_input_csv(tmp_path, 10, 3) == fallback

    def test_falls_back_to_bare_epoch_name(self, tmp_path):
        fallback = self.touch(tmp_path / "input" / "10" / "3.csv")
        assert resolve_input_csv(tmp_path, 10, 3) == fallback

    def test_missing_everywhere(self, tmp_path):
        with pytest.raises(InputValidationException, match="epoch-3.csv") as exc_info:
            resolve_input_csv(tmp_path, 10, 3)
        assert len(exc_info.value.details["searched"]) == 3
