import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

from docx import Document
from pdfminer.high_level import extract_text as pdf_extract

from cvmatch.utils.logging_config import get_logger
from cvmatch.utils.text import sanitize_text

logging.getLogger("pdfminer").setLevel(logging.ERROR)
logger = get_logger(__name__)

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}


def read_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def read_docx(data: bytes) -> str:
    doc = Document(BytesIO(data))
    return "\n".join([p.text for p in doc.paragraphs])


def read_pdf(data: bytes) -> str:
    try:
        return pdf_extract(BytesIO(data))
    except Exception as e:
        # damaged or mislabelled PDF; keep whatever text the bytes carry
        logger.warning(f"PDF text extraction failed, decoding raw bytes instead: {e}")
        return read_txt(data)


def _document_kind(file_name: Optional[str], content_type: Optional[str]) -> str:
    ext = Path(file_name or "").suffix.lower()
    if content_type in PDF_TYPES or ext == ".pdf":
        return "pdf"
    if content_type in DOCX_TYPES or ext == ".docx":
        return "docx"
    return "txt"


def extract_document_text(data: bytes, file_name: Optional[str] = None, content_type: Optional[str] = None) -> str:
    """
    Turn an uploaded CV into sanitized plain text.

    PDF and DOCX are detected by content type or file extension; anything
    else is decoded as UTF-8 with replacement characters.
    """
    kind = _document_kind(file_name, content_type)
    logger.debug(f"Extracting {kind} text from {file_name or '<bytes>'} ({len(data)} bytes)")

    if kind == "pdf":
        text = read_pdf(data)
    elif kind == "docx":
        text = read_docx(data)
    else:
        text = read_txt(data)

    return sanitize_text(text)
