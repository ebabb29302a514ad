"""CV text extraction from uploaded PDF documents."""

import io
from typing import List

import PyPDF2
from PyPDF2.errors import PdfReadError
import structlog

from tech_radar.core.error_handling import ParsingError

logger = structlog.get_logger(__name__)

PDF_MAGIC = b"%PDF"


def looks_like_pdf(data: bytes) -> bool:
    """Check the PDF header signature."""
    return data[:1024].lstrip().startswith(PDF_MAGIC)


def extract_pdf_text(data: bytes, file_name: str = None) -> str:
    """Extract plain text from every page of a PDF.

    Args:
        data: Raw PDF bytes
        file_name: Original upload name, for logging only

    Returns:
        Page texts joined by newlines and trimmed; empty if the PDF has no text layer

    Raises:
        ParsingError: If the bytes are not a readable PDF
    """
    if not data or not looks_like_pdf(data):
        raise ParsingError("Uploaded file is not a PDF document.")

    try:
        pdf_reader = PyPDF2.PdfReader(io.BytesIO(data))
        pages = pdf_reader.pages
    except (PdfReadError, ValueError) as e:
        logger.warning("PDF could not be read", file_name=file_name, error=str(e))
        raise ParsingError(f"Could not read PDF: {e}", original_error=e)

    text_content: List[str] = []
    for page_num, page in enumerate(pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning("Failed to extract text from page", page=page_num + 1, error=str(e))
            continue
        if page_text and page_text.strip():
            text_content.append(page_text)

    full_text = "\n".join(text_content).strip()
    logger.info(
        "PDF text extracted",
        file_name=file_name,
        pages=len(pages),
        text_length=len(full_text)
    )
    return full_text
