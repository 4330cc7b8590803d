# folio/core/services/reference_service.py
import logging
from dataclasses import dataclass
from typing import List

from pypdf import PdfReader

from folio.core.config import Settings
from folio.core.utils.file_ops import read_text_file, resolve_data_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceText:
    cv_text: str = ""
    context_text: str = ""
    source: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.cv_text and not self.context_text


def extract_pdf_text(file_path: str) -> str:
    reader = PdfReader(file_path)
    pages: List[str] = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            pages.append(text)
    full_text = "\n".join(pages)
    if not full_text.strip():
        raise ValueError(f"No text could be extracted from {file_path}")
    return full_text


def load_cv_text(settings: Settings) -> tuple[str, str]:
    """Return (text, source) for the CV, trying the PDF first and then each text fallback in order."""
    pdf_path = resolve_data_path(settings.data_dir, settings.cv_pdf)
    try:
        text = extract_pdf_text(pdf_path)
        logger.info("CV text extracted from %s", pdf_path)
        return text, settings.cv_pdf
    except Exception as e:
        logger.warning("Error extracting PDF text from %s: %s", pdf_path, e)

    for name in settings.cv_text_fallbacks:
        path = resolve_data_path(settings.data_dir, name)
        try:
            text = read_text_file(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            continue
        if text is not None:
            logger.info("CV text loaded from text file %s", path)
            return text, name

    logger.warning(
        "Could not load CV text. Please ensure %s or one of %s is accessible.",
        settings.cv_pdf,
        ", ".join(settings.cv_text_fallbacks),
    )
    return "", ""


def load_context_text(settings: Settings) -> str:
    path = resolve_data_path(settings.data_dir, settings.cv_context_file)
    try:
        text = read_text_file(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return ""
    if text is None:
        logger.warning("%s not found.", settings.cv_context_file)
        return ""
    return text


def load_reference_text(settings: Settings) -> ReferenceText:
    """Load the CV and its supplementary context. Never raises; failures leave the texts empty."""
    cv_text, source = load_cv_text(settings)
    context_text = load_context_text(settings)
    return ReferenceText(cv_text=cv_text, context_text=context_text, source=source)
