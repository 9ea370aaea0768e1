"""Tests for the command-line pipeline."""

from main import main


def test_summary_and_focus(dataset_file, capsys):
    assert main([str(dataset_file), "--member", "C"]) == 0
    out = capsys.readouterr().out
    assert "4 members across 3 generations" in out
    assert "Mohammad Yusuf (generation 2)" in out
    assert "पिता/अब्बा (Father): Abdul Rahim" in out
    assert "दादा/बाबा (Grandfather): Abdul Karim" in out
    assert out.rstrip().endswith("Done!")


def test_filter_listing(dataset_file, capsys):
    assert main([str(dataset_file), "--filter", "generation", "--generation", "2"]) == 0
    out = capsys.readouterr().out
    assert "Members (2):" in out
    assert "C: Mohammad Yusuf (generation 2)" in out
    assert "D: Mohammad Idris (generation 2)" in out


def test_unknown_member(dataset_file, capsys):
    assert main([str(dataset_file), "--member", "nobody"]) == 1
    assert "Member ID nobody not found" in capsys.readouterr().err


def test_missing_dataset(tmp_path, capsys):
    assert main([str(tmp_path / "absent.json")]) == 1
    assert "Could not load dataset" in capsys.readouterr().err


def test_duplicate_ids_reported(tmp_path, capsys):
    path = tmp_path / "dupes.json"
    path.write_text('[{"id": "A", "name": "One"}, {"id": "A", "name": "Two"}]', encoding="utf-8")
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert "Duplicate member ID A appears 2 times" in captured.out
    assert "Could not build member store" in captured.err


def test_certificate_needs_member(dataset_file, tmp_path, capsys):
    assert main([str(dataset_file), "--certificate", str(tmp_path / "c.pdf")]) == 1
    assert "--certificate needs --member" in capsys.readouterr().err


def test_documents_and_chart(dataset_file, tmp_path):
    certificate = tmp_path / "certificate.pdf"
    memorial = tmp_path / "memorial.pdf"
    chart = tmp_path / "tree.dot"
    exit_code = main(
        [
            str(dataset_file),
            "--member",
            "D",
            "--certificate",
            str(certificate),
            "--memorial",
            str(memorial),
            "--chart",
            str(chart),
        ]
    )
    assert exit_code == 0
    assert certificate.read_bytes().startswith(b"%PDF")
    assert memorial.read_bytes().startswith(b"%PDF")
    assert "Mohammad Idris" in chart.read_text(encoding="utf-8")


def test_cyclic_dataset_still_lists_relatives(tmp_path, capsys):
    path = tmp_path / "cyclic.json"
    path.write_text(
        '[{"id": "X", "name": "Xavier", "fatherId": "Y"},'
        ' {"id": "Y", "name": "Yasin", "fatherId": "X"}]',
        encoding="utf-8",
    )
    assert main([str(path), "--member", "X"]) == 0
    out = capsys.readouterr().out
    assert "Cycle detected in father links" in out
    assert "पिता/अब्बा (Father): Yasin" in out
    assert "बेटा (Son): Yasin" in out


def test_non_boolean_flag_rejected(tmp_path, capsys):
    path = tmp_path / "flags.json"
    path.write_text('[{"id": "A", "name": "A", "isDeceased": "false"}]', encoding="utf-8")
    assert main([str(path)]) == 1
    assert "Record 0 has non-boolean isDeceased" in capsys.readouterr().err
