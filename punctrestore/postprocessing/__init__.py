"""Post-processing subsystem - prediction decoding, punctuation and true-casing decisions."""
from punctrestore.postprocessing.TensorDecoder import TensorDecoder, decode_prediction
from punctrestore.postprocessing.Lexicon import Lexicon, DEFAULT_LEXICON
from punctrestore.postprocessing.RestorationEngine import RestorationEngine

__all__ = ['TensorDecoder', 'decode_prediction', 'Lexicon', 'DEFAULT_LEXICON', 'RestorationEngine']
