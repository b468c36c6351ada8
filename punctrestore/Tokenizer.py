# punctrestore/Tokenizer.py
import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Union
import numpy as np
import numpy.typing as npt

from .postprocessing.RestorationEngine import RestorationEngine
from .types import PredictionTensor

SPECIAL_TOKENS: Dict[str, str] = {
    'PAD': '[PAD]',
    'UNK': '[UNK]',
    'CLS': '[CLS]',
    'SEP': '[SEP]',
}

_WHITESPACE = re.compile(r'\s+')
_STRIPPED_PUNCTUATION = re.compile(r'[.,!?;:]')


class Tokenizer:
    """Word-level placeholder tokenizer for the punctuation model.

    Produces the token sequence the RestorationEngine consumes: the lowercased,
    punctuation-free words of the text wrapped in [CLS] ... [SEP]. Input ids
    are placeholders (special token index or UNK); no vocabulary is applied.

    Args:
        max_length: Maximum sequence length including sentinels (default: 512)
        engine: RestorationEngine used by postprocess()
    """

    def __init__(self, max_length: int = 512, engine: Optional[RestorationEngine] = None) -> None:
        if max_length < 2:
            raise ValueError("max_length must leave room for [CLS] and [SEP]")
        self.max_length: int = max_length
        self.special_tokens: Dict[str, str] = dict(SPECIAL_TOKENS)
        self.engine: RestorationEngine = engine or RestorationEngine()
        self.model_path: Optional[Path] = None
        self.logger = logging.getLogger(__name__)

    def preprocess(self, text: str) -> str:
        """Lowercase, collapse whitespace and drop existing punctuation."""
        text = text.lower()
        text = _WHITESPACE.sub(' ', text)
        text = _STRIPPED_PUNCTUATION.sub('', text)
        return text.strip()

    def tokenize(self, text: str) -> list[str]:
        """Split preprocessed text on spaces and add sentinels, truncating to max_length."""
        words = self.preprocess(text).split(' ')
        tokens = [self.special_tokens['CLS'], *words, self.special_tokens['SEP']]

        if len(tokens) > self.max_length:
            self.logger.warning(f"Input text truncated from {len(tokens)} to {self.max_length} tokens")
            tokens = tokens[:self.max_length - 1] + [self.special_tokens['SEP']]

        return tokens

    def to_model_input(self, tokens: list[str]) -> Dict[str, npt.NDArray[np.int64]]:
        """Build padded input_ids and attention_mask arrays of shape (1, max_length)."""
        special_ids = {token: idx for idx, token in enumerate(self.special_tokens.values())}
        unk_id = special_ids[self.special_tokens['UNK']]
        pad_id = special_ids[self.special_tokens['PAD']]

        input_ids = np.full((1, self.max_length), pad_id, dtype=np.int64)
        attention_mask = np.zeros((1, self.max_length), dtype=np.int64)

        length = min(len(tokens), self.max_length)
        input_ids[0, :length] = [special_ids.get(token, unk_id) for token in tokens[:length]]
        attention_mask[0, :length] = 1

        return {'input_ids': input_ids, 'attention_mask': attention_mask}

    def load_model(self, model_path: Union[str, Path]) -> None:
        """Record the tokenizer model path; vocabulary loading is not implemented."""
        path = Path(model_path)
        if not path.exists():
            raise FileNotFoundError(f"Tokenizer model not found at {path}")
        self.model_path = path

    def postprocess(self, tokens: list[str], model_outputs: Mapping[str, PredictionTensor]) -> str:
        """Restore punctuation and casing from model outputs."""
        return self.engine.process(tokens, model_outputs)
