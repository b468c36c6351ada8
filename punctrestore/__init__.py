"""Punctuation, true-casing and sentence boundary restoration.

Entry point: punctrestore.PunctuationRestorer.PunctuationRestorer
"""
from .types import PunctuationClass, PredictionTensor, TensorLayout, DecisionContext, SentenceAssemblyState
from .postprocessing import RestorationEngine, TensorDecoder, Lexicon

__all__ = [
    'PunctuationClass',
    'PredictionTensor',
    'TensorLayout',
    'DecisionContext',
    'SentenceAssemblyState',
    'RestorationEngine',
    'TensorDecoder',
    'Lexicon'
]
