# punctrestore/SentenceSplitter.py
import logging
from typing import List

import nltk
from nltk.tokenize import sent_tokenize


class SentenceSplitter:
    """Splits restored text into sentences with NLTK's Punkt tokenizer.

    Args:
        language: Punkt model language (default: 'english')
        auto_download: Download the 'punkt_tab' resource on first LookupError
    """

    PUNKT_RESOURCE = 'punkt_tab'

    def __init__(self, language: str = 'english', auto_download: bool = False) -> None:
        self.language: str = language
        self.auto_download: bool = auto_download
        self._download_attempted: bool = False
        self.logger = logging.getLogger(__name__)

    def split(self, text: str) -> List[str]:
        """Return the sentences of text, [] for empty or whitespace-only text."""
        if not text or not text.strip():
            return []

        try:
            return sent_tokenize(text, language=self.language)
        except LookupError:
            if not self.auto_download or self._download_attempted:
                raise LookupError(
                    f"Missing NLTK {self.PUNKT_RESOURCE} tokenizer data. "
                    f"Run `python -m nltk.downloader {self.PUNKT_RESOURCE}`."
                )

        self._download_attempted = True
        self.logger.info(f"Downloading NLTK {self.PUNKT_RESOURCE} data...")
        nltk.download(self.PUNKT_RESOURCE, quiet=True)
        return sent_tokenize(text, language=self.language)
