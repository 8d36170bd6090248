from __future__ import annotations

import zipfile

import pytest
from pypdf import PdfWriter

from skillmatch.resume import extract_text, fix_spacing, load_resume_text

_DOCX_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    "<w:body>"
    "<w:p><w:r><w:t>Jane Doe</w:t></w:r></w:p>"
    "<w:p><w:r><w:t>Python, </w:t></w:r><w:r><w:t>Docker</w:t></w:r></w:p>"
    "</w:body></w:document>"
)


def test_plain_text(tmp_path):
    path = tmp_path / "resume.md"
    path.write_text("# Jane\nReact and AWS")
    assert extract_text(path) == "# Jane\nReact and AWS"


def test_docx_paragraphs(tmp_path):
    path = tmp_path / "resume.docx"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("word/document.xml", _DOCX_XML)
    assert extract_text(path) == "Jane Doe\nPython, Docker"


def test_unsupported_format(tmp_path):
    path = tmp_path / "resume.rtf"
    path.write_text("x")
    with pytest.raises(ValueError, match="Unsupported resume format"):
        extract_text(path)


def test_load_resume_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_resume_text(tmp_path / "missing.txt")
    blank = tmp_path / "blank.txt"
    blank.write_text("   \n")
    with pytest.raises(ValueError, match="Could not extract"):
        load_resume_text(blank)


def test_fix_spacing_only_for_glued_text():
    spaced = "Senior engineer with React and TypeScript experience across many teams."
    assert fix_spacing(spaced) == spaced

    glued = "SeniorEngineerWithReactTypeScriptAndPython3ExperienceAcrossManyTeams,Remote"
    fixed = fix_spacing(glued)
    assert "React Type Script" in fixed
    assert "Python 3 Experience" in fixed
    assert ", Remote" in fixed


def test_pdf_without_text_layer(tmp_path):
    path = tmp_path / "scan.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    with open(path, "wb") as f:
        writer.write(f)

    assert extract_text(path).strip() == ""
    with pytest.raises(ValueError, match="Could not extract"):
        load_resume_text(path)
