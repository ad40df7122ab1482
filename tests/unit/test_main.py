from pathlib import Path

import pytest

from medcommittee.main import main


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LLM_PROVIDER", "example")
    monkeypatch.setenv("OCR_PROVIDER", "none")
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))


class TestMain:
    def test_processes_files_and_writes_workbook(
        self,
        tmp_path: Path,
        committee_pdf_bytes: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        pdf = tmp_path / "committee.pdf"
        pdf.write_bytes(committee_pdf_bytes)

        exit_code = main([str(pdf)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "committee.pdf: completed" in out
        assert "1 completed, 0 errors" in out
        assert len(list((tmp_path / "exports").glob("*.xlsx"))) == 1

    def test_output_dir_argument_overrides_setting(
        self, tmp_path: Path, committee_pdf_bytes: bytes
    ) -> None:
        pdf = tmp_path / "committee.pdf"
        pdf.write_bytes(committee_pdf_bytes)

        main([str(pdf), "--output-dir", str(tmp_path / "custom")])

        assert len(list((tmp_path / "custom").glob("*.xlsx"))) == 1

    def test_returns_one_when_every_document_fails(
        self,
        tmp_path: Path,
        empty_pdf_bytes: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        pdf = tmp_path / "blank.pdf"
        pdf.write_bytes(empty_pdf_bytes)

        exit_code = main([str(pdf)])

        assert exit_code == 1
        assert "blank.pdf: error" in capsys.readouterr().out
        assert len(list((tmp_path / "exports").glob("*.xlsx"))) == 1

    def test_missing_file_returns_one(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.pdf")]) == 1

    def test_unsupported_file_returns_one(self, tmp_path: Path) -> None:
        notes = tmp_path / "notes.txt"
        notes.write_text("not a document", encoding="utf-8")
        assert main([str(notes)]) == 1
