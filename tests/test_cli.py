from code_precheck import cli


def test_check_writes_reports_and_blocks_on_errors(tmp_path, capsys, function_lines):
    src = tmp_path / "long.js"
    src.write_text("\n".join(function_lines("main", 31)) + "\n", encoding="utf-8")

    rc = cli.main(["check", str(src)])

    assert rc == 2
    assert (tmp_path / "long.js.rep").exists()
    assert (tmp_path / "long.js.rep.json").exists()
    out = capsys.readouterr().out
    assert "[OK]" in out
    assert "gate: BLOCK" in out


def test_check_folder_clean(tmp_path, capsys):
    (tmp_path / "ok.js").write_text("const limit = 10;\nrun(limit);\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("wait(99)\n", encoding="utf-8")

    rc = cli.main(["check", str(tmp_path), "--parallel"])

    assert rc == 0
    out = capsys.readouterr().out
    assert "ok.js" in out
    assert "notes.md" not in out


def test_check_no_input(tmp_path, capsys):
    assert cli.main(["check", str(tmp_path)]) == 4
    assert "No files to check" in capsys.readouterr().out


def test_check_skips_blank_file(tmp_path, capsys):
    (tmp_path / "blank.js").write_text("   \n", encoding="utf-8")
    assert cli.main(["check", str(tmp_path)]) == 0
    assert "[SKIP]" in capsys.readouterr().out


def test_check_missing_file(tmp_path, capsys):
    assert cli.main(["check", str(tmp_path / "missing.js")]) == 3
    assert "[ERR]" in capsys.readouterr().out


def test_review_pending(tmp_path, capsys):
    src = tmp_path / "app.js"
    src.write_text("let x = 5;\nwait(99);\n", encoding="utf-8")

    rc = cli.main(["review", str(src), "--accept", "1"])

    assert rc == 1
    out = capsys.readouterr().out
    assert "#1 line 1 [warning] Unused Variable: accepted" in out
    assert "Pending: 1" in out


def test_review_complete_writes_csv(tmp_path, capsys):
    src = tmp_path / "app.js"
    src.write_text("let x = 5;\nwait(99);\n", encoding="utf-8")
    out_csv = tmp_path / "review.csv"

    rc = cli.main(["review", str(src), "--all", "accepted", "--reject", "2,99", "--out", str(out_csv)])

    assert rc == 0
    assert out_csv.read_text(encoding="utf-8").splitlines()[1:] == [
        "1;Unused Variable;warning;accepted",
        "2;Magic Number;info;rejected",
    ]
    assert "[REPORT]" in capsys.readouterr().out


def test_review_missing_file(tmp_path, capsys):
    assert cli.main(["review", str(tmp_path / "missing.js")]) == 3


def test_bad_config_folder(tmp_path, capsys):
    src = tmp_path / "app.js"
    src.write_text("wait(5);\n", encoding="utf-8")
    assert cli.main(["check", str(src), "--config", str(tmp_path / "nope")]) == 3
    assert "Config folder not found" in capsys.readouterr().out


def test_check_same_stem_files_keep_both_reports(tmp_path, capsys):
    (tmp_path / "index.js").write_text("wait(99);\n", encoding="utf-8")
    (tmp_path / "index.ts").write_text("let x = 5;\n", encoding="utf-8")

    rc = cli.main(["check", str(tmp_path)])

    assert rc == 0
    assert "MagicNumber" in (tmp_path / "index.js.rep.json").read_text(encoding="utf-8")
    assert "UnusedVariable" in (tmp_path / "index.ts.rep.json").read_text(encoding="utf-8")
