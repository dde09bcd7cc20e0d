import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from main import main


class TestMain:
    def test_processes_file(self, tmp_path, capsys):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 1, 1, 1.0",
            "dispute, 1, 1,",
        ]))

        assert main([str(csv_file)]) == 0

        out = capsys.readouterr().out
        assert out.splitlines() == [
            "client,available,held,total,locked",
            "1,0,1,1,false",
        ]

    def test_sample_input_without_arguments(self, capsys):
        assert main([]) == 0

        out = capsys.readouterr().out
        assert out.splitlines() == [
            "client,available,held,total,locked",
            "1,1.5,0,1.5,false",
            "2,2,0,2,false",
        ]

    def test_ledger_error_exits_nonzero(self, tmp_path, capsys, caplog):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 1, 1, 1.0",
            "refund, 1, 2, 1.0",
        ]))

        with caplog.at_level(logging.ERROR):
            assert main([str(csv_file)]) == 1

        assert capsys.readouterr().out == ""
        assert "Invalid Operation at line: 2" in caplog.text

    def test_oversized_amount_exits_nonzero(self, tmp_path, capsys, caplog):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 1, 1, 123456789012345678901234567.5",
        ]))

        with caplog.at_level(logging.ERROR):
            assert main([str(csv_file)]) == 1

        assert capsys.readouterr().out == ""
        assert "Invalid Amount at line: 1" in caplog.text

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert main([str(tmp_path / "missing.csv")]) == 1
        assert "Cannot read" in caplog.text

    def test_too_many_arguments(self, capsys):
        assert main(["a.csv", "b.csv"]) == 1
        assert "Usage" in capsys.readouterr().err
