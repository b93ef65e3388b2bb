"""Integration tests: end-to-end word list → PDF/XLSX/SVG."""

import openpyxl
import pytest

from crossword_generator import main


def _write_words(tmp_path, text="視点=してん\n海底＝かいてい\n教科書（きょうかしょ）\n砂 すな\n穴=あな\n"):
    path = tmp_path / "words.txt"
    path.write_text(text, encoding="utf-8")
    return path


class TestEndToEnd:
    def test_text_to_all_outputs(self, tmp_path):
        words = _write_words(tmp_path)
        main([str(words), str(tmp_path / "puzzle.pdf"), "--seed", "42"])
        out = tmp_path / "output"
        assert (out / "puzzle.pdf").read_bytes()[:5] == b"%PDF-"
        assert (out / "puzzle_clues.xlsx").exists()
        assert (out / "puzzle_puzzle.svg").exists()
        assert (out / "puzzle_answer.svg").exists()

    def test_default_output_name(self, tmp_path):
        words = _write_words(tmp_path)
        main([str(words), "--seed", "1", "--labels", "alpha"])
        assert (tmp_path / "output" / "words.pdf").exists()

    def test_all_options(self, tmp_path, capsys):
        words = _write_words(tmp_path)
        main([
            str(words), str(tmp_path / "p.pdf"),
            "--seed", "3", "--title", "テスト",
            "--highlight", "0,0", "--highlight", "1,0",
            "--prompt", "並び替えよう", "--answer", "うんてい",
            "--random-pick-prob", "1.0", "--top-k", "2",
        ])
        err = capsys.readouterr().err
        assert "Placed 5 words" in err

    def test_missing_reading_reported_and_skipped(self, tmp_path, capsys):
        words = _write_words(tmp_path, "視点=してん\n海底\n")
        main([str(words), str(tmp_path / "p.pdf"), "--seed", "1"])
        err = capsys.readouterr().err
        assert "読みが未指定" in err
        assert "Placed 1 words" in err
        wb = openpyxl.load_workbook(tmp_path / "output" / "p_clues.xlsx")
        assert wb["Not placed"].cell(row=2, column=1).value == "海底"

    def test_missing_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.txt")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_no_usable_entries_exits(self, tmp_path):
        words = _write_words(tmp_path, "視点\n海底\n")
        with pytest.raises(SystemExit):
            main([str(words)])

    def test_bad_highlight_rejected(self, tmp_path):
        words = _write_words(tmp_path)
        with pytest.raises(SystemExit) as exc:
            main([str(words), "--highlight", "zero"])
        assert exc.value.code == 2

    @pytest.mark.slow
    def test_xlsx_input(self, tmp_path):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(("単語", "読み"))
        for display, reading in [("砂", "すな"), ("穴", "あな"), ("視点", "シテン"),
                                 ("天気", "てんき"), ("手紙", "てがみ")]:
            ws.append((display, reading))
        path = tmp_path / "words.xlsx"
        wb.save(path)

        main([str(path), "--seed", "7"])
        assert (tmp_path / "output" / "words.pdf").exists()
