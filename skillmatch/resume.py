"""Plain-text extraction from resume files (TXT, Markdown, DOCX, PDF)."""
from __future__ import annotations

import re
import zipfile
from pathlib import Path
from xml.etree import ElementTree

from pypdf import PdfReader

from skillmatch.log import get_logger

log = get_logger(__name__)

_DOCX_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def extract_text(path: Path) -> str:
    """Return plain text from a resume file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".txt", ".md"):
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".docx":
        return _extract_docx(path)
    if suffix == ".pdf":
        return _extract_pdf(path)
    raise ValueError(f"Unsupported resume format: {suffix}")


def load_resume_text(path: Path) -> str:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {path}")
    text = extract_text(path)
    if not text.strip():
        raise ValueError(f"Could not extract any text from {path.name}")
    log.info("Read %d characters of resume text from %s", len(text), path.name)
    return text


def fix_spacing(text: str) -> str:
    """Re-insert spaces where PDF extraction glued words together.

    Only kicks in when spaces are abnormally rare, since glued words hide
    skills from whole-word matching ("ReactTypeScript").
    """
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%), applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", fixed)
    fixed = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", fixed)
    fixed = re.sub(r"([!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    log.debug("pypdf read %d pages from %s", len(pages), path.name)
    return "\n".join(fix_spacing(text) for text in pages)


def _extract_docx(path: Path) -> str:
    texts: list[str] = []
    with zipfile.ZipFile(path) as zf:
        with zf.open("word/document.xml") as f:
            tree = ElementTree.parse(f)
            for para in tree.iter(f"{_DOCX_NS}p"):
                parts = [node.text for node in para.iter(f"{_DOCX_NS}t") if node.text]
                if parts:
                    texts.append("".join(parts))
    return "\n".join(texts)
