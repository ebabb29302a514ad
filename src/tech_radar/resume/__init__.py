"""CV document handling."""

from .extractor import extract_pdf_text, looks_like_pdf

__all__ = ["extract_pdf_text", "looks_like_pdf"]
