"""Document text extraction for uploaded resumes.

Runs synchronously; the orchestrator calls it through ``asyncio.to_thread``.
"""

import io
import logging
import re
from pathlib import Path

import pdfplumber
from bs4 import BeautifulSoup
from docx import Document

from services.errors import DocumentExtractionError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({".txt", ".md", ".text", ".csv", ".rtf"})
HTML_EXTENSIONS = frozenset({".html", ".htm"})
SUPPORTED_EXTENSIONS = frozenset({".pdf", ".docx", ".doc"}) | TEXT_EXTENSIONS | HTML_EXTENSIONS

_PRINTABLE_RUN_RE = re.compile(rb"[\x20-\x7e\t\r\n]{4,}")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def extract_pdf(data: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_docx(data: bytes) -> str:
    """Extract paragraph and table text from a DOCX file."""
    doc = Document(io.BytesIO(data))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.append(" | ".join(cell.text.strip() for cell in row.cells))
    return "\n".join(lines).strip()


def extract_doc(data: bytes) -> str:
    """Best-effort text from a legacy binary .doc: longest printable runs.

    Word 97 stores text either as 8-bit runs or UTF-16LE; both readings are
    tried and the one yielding more text wins.
    """
    ascii_runs = [r.decode("ascii") for r in _PRINTABLE_RUN_RE.findall(data)]
    utf16 = data.decode("utf-16-le", errors="ignore")
    utf16_runs = re.findall(r"[\x20-\x7e\t\r\n]{4,}", utf16)
    runs = max(ascii_runs, utf16_runs, key=lambda rs: sum(len(r) for r in rs))
    return "\n".join(r.strip() for r in runs if r.strip())


def extract_html(data: bytes) -> str:
    soup = BeautifulSoup(data, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    return _BLANK_LINES_RE.sub("\n", text).strip()


def decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace").strip()


def _sniff_extension(data: bytes, filename: str) -> str:
    ext = Path(filename).suffix.lower()
    if data.startswith(b"%PDF"):
        return ".pdf"
    if not ext and data.startswith(b"PK"):
        return ".docx"
    return ext


def extract_text(data: bytes, filename: str) -> str:
    """Plain text of an uploaded resume.

    Raises DocumentExtractionError for unsupported types, unreadable content
    and documents with no extractable text.
    """
    ext = _sniff_extension(data, filename)

    try:
        if ext == ".pdf":
            text = extract_pdf(data)
        elif ext == ".docx":
            text = extract_docx(data)
        elif ext == ".doc":
            text = extract_doc(data)
        elif ext in HTML_EXTENSIONS:
            text = extract_html(data)
        elif ext in TEXT_EXTENSIONS or not ext:
            text = decode_text(data)
        else:
            raise DocumentExtractionError(filename, f"unsupported file type '{ext}'")
    except DocumentExtractionError:
        raise
    except Exception as e:
        logger.warning("Failed to read %s: %s", filename, e)
        raise DocumentExtractionError(filename, f"could not read {ext or 'file'}: {e}") from e

    if not text.strip():
        raise DocumentExtractionError(filename, "no text could be extracted")
    return text
