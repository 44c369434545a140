"""Load resumes and job descriptions from disk as plain text."""

import re
from pathlib import Path

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")

# Zero-width characters, BOM, soft hyphen, private-use glyphs and U+FFFD
_INVISIBLE = re.compile(r"[\u200b-\u200d\u2060\ufeff\u00ad\ue000-\uf8ff\ufffd]")
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_CID = re.compile(r"\(cid:\d+\)")
_BULLET = re.compile(r"^(\s*)[●•◦◆■▪★○]\s*", re.MULTILINE)


def load_document(file_path: str | Path) -> str:
    """Read a PDF, DOCX, TXT or MD file and return cleaned plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        raw = _read_pdf(path)
    elif suffix == ".docx":
        raw = _read_docx(path)
    elif suffix in (".txt", ".md"):
        raw = path.read_text(encoding="utf-8")
    else:
        raise ValueError(
            f"Unsupported file format: {path.suffix} (expected {', '.join(SUPPORTED_SUFFIXES)})"
        )
    return clean_text(raw)


def clean_text(text: str) -> str:
    """Strip extraction artifacts and normalise whitespace.

    Handles: control characters, invisible unicode, PDF CID references,
    decorative bullets, repeated spaces and runs of blank lines. Long lines
    repeated verbatim (running headers and footers) are kept once.
    """
    text = _CONTROL.sub("", text)
    text = _INVISIBLE.sub("", text)
    text = _CID.sub("", text)
    text = _BULLET.sub(r"\1- ", text)

    seen: set[str] = set()
    lines = []
    for line in text.splitlines():
        stripped = re.sub(r"[ \t]+", " ", line).strip()
        if len(stripped) >= 10:
            if stripped in seen:
                continue
            seen.add(stripped)
        lines.append(stripped)

    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _read_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    pages = [page.get_text() for page in doc]
    doc.close()
    return "\n".join(pages)


def _read_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
