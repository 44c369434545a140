"""Tests for document loading and text cleanup."""

from __future__ import annotations

import pytest

from recruit_copilot.parsers.documents import clean_text, load_document


class TestCleanText:
    def test_removes_invisible_and_control_characters(self):
        text = "\ufeffJane\u200b Doe\x07\nBack\u00adend"
        assert clean_text(text) == "Jane Doe\nBackend"

    def test_removes_pdf_cid_references(self):
        assert clean_text("Python(cid:3) developer") == "Python developer"

    def test_normalises_bullets(self):
        assert clean_text("● Built APIs\n  • Led team") == "- Built APIs\n- Led team"

    def test_collapses_whitespace_and_blank_lines(self):
        text = "Skills:\t\tPython   Go\n\n\n\n\nExperience"
        assert clean_text(text) == "Skills: Python Go\n\nExperience"

    def test_drops_repeated_long_lines(self):
        header = "Jane Doe - Curriculum Vitae"
        text = f"{header}\nPage one\n{header}\nPage two"
        assert clean_text(text) == f"{header}\nPage one\nPage two"

    def test_short_lines_may_repeat(self):
        assert clean_text("- Go\n- Go") == "- Go\n- Go"

    def test_keeps_cjk(self):
        assert clean_text("高级后端工程师\n任职要求") == "高级后端工程师\n任职要求"


class TestLoadDocument:
    def test_text_file(self, tmp_path):
        path = tmp_path / "jd.txt"
        path.write_text("Senior Engineer\n\n\n\nRequirements:  Python", encoding="utf-8")
        assert load_document(path) == "Senior Engineer\n\nRequirements: Python"

    def test_markdown_file(self, tmp_path):
        path = tmp_path / "resume.md"
        path.write_text("# Jane Doe\n• Python", encoding="utf-8")
        assert load_document(str(path)) == "# Jane Doe\n- Python"

    def test_docx_file(self, tmp_path):
        from docx import Document

        path = tmp_path / "resume.docx"
        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("")
        doc.add_paragraph("Backend Engineer")
        doc.save(str(path))

        assert load_document(path) == "Jane Doe\nBackend Engineer"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "resume.odt"
        path.write_text("x")
        with pytest.raises(ValueError, match="Unsupported file format: .odt"):
            load_document(path)
