# punctrestore/postprocessing/RestorationEngine.py
import logging
import re
from typing import Mapping, Optional, Sequence

from ..types import (
    DecisionContext,
    PredictionTensor,
    SentenceAssemblyState,
    mark_for_class,
)
from .Lexicon import DEFAULT_LEXICON, Lexicon
from .TensorDecoder import TensorDecoder

_DIGITS = re.compile(r'[0-9]+')
_SINGLE_DIGIT = re.compile(r'[0-9]')

PUNCTUATION_OUTPUT = 'post_preds'
CAPITALIZATION_OUTPUT = 'cap_preds'
SEGMENTATION_OUTPUT = 'seg_preds'


class RestorationEngine:
    """Turns a token sequence plus three prediction streams into punctuated, true-cased text.

    Single Responsibility: fuse per-token classifier outputs with lexical
    heuristics. Knows nothing about tokenization, inference or sentence splitting.

    One left-to-right pass over the content tokens (sentinels stripped) with a
    SentenceAssemblyState local to the call, so an instance can be shared
    between threads.

    Args:
        lexicon: Word lists for the heuristics (defaults to DEFAULT_LEXICON)
        decoder: TensorDecoder used to read predictions
        debug_token_limit: Number of leading tokens whose decisions are logged at DEBUG
    """

    def __init__(self,
                 lexicon: Optional[Lexicon] = None,
                 decoder: Optional[TensorDecoder] = None,
                 debug_token_limit: int = 3) -> None:
        self.lexicon: Lexicon = lexicon or DEFAULT_LEXICON
        self.decoder: TensorDecoder = decoder or TensorDecoder()
        self.debug_token_limit: int = debug_token_limit
        self.logger = logging.getLogger(__name__)

    def process(self, tokens: Sequence[str], model_outputs: Mapping[str, PredictionTensor]) -> str:
        """Restore punctuation and casing for one tokenized text.

        Algorithm:
        1. Fewer than 3 tokens (nothing between the sentinels): join verbatim
        2. Strip the leading and trailing sentinel
        3. For each non-blank content token, decode the three predictions at
           its content index, decide casing and punctuation, append to the
           current sentence and flush on a terminal mark
        4. Force-terminate the open sentence and join sentences with one space

        Args:
            tokens: Token sequence including start and end sentinels
            model_outputs: Tensors keyed by 'post_preds', 'cap_preds', 'seg_preds'

        Returns:
            Punctuated, true-cased text
        """
        if not tokens:
            return ''
        if len(tokens) <= 2:
            return ' '.join(tokens)

        content = list(tokens[1:-1])
        model_outputs = model_outputs or {}
        punct_tensor = model_outputs.get(PUNCTUATION_OUTPUT)
        cap_tensor = model_outputs.get(CAPITALIZATION_OUTPUT)
        seg_tensor = model_outputs.get(SEGMENTATION_OUTPUT)

        if self.logger.isEnabledFor(logging.DEBUG):
            for name, tensor in model_outputs.items():
                if tensor is None:
                    self.logger.debug(f"{name}: missing")
                    continue
                self.logger.debug(f"{name}: dims={tensor.dims} layout={tensor.layout.name} "
                                  f"sample={tensor.data[:10].tolist()}")

        state = SentenceAssemblyState()

        for i, raw in enumerate(content):
            token = raw or ''
            if not token.strip():
                continue

            context = DecisionContext(
                token=token,
                previous_token=content[i - 1] if i > 0 else None,
                next_token=content[i + 1] if i < len(content) - 1 else None,
                punctuation_class=self.decoder.decode(punct_tensor, i),
                capitalization_class=self.decoder.decode(cap_tensor, i),
                segmentation_class=self.decoder.decode(seg_tensor, i),
            )

            cased, mark = self.decide(context, force_capitalize=state.capitalize_next)

            if i < self.debug_token_limit:
                self.logger.debug(
                    f"token[{i}]={token!r} prev={context.previous_token!r} next={context.next_token!r} "
                    f"punct={context.punctuation_class}->{mark!r} "
                    f"cap={context.capitalization_class}->{cased!r} seg={context.segmentation_class}"
                )

            state.append(cased, mark)

        state.finish()
        return state.text()

    def decide(self, context: DecisionContext, force_capitalize: bool = False) -> tuple[str, str]:
        """Return (cased token, punctuation mark) for one position."""
        capitalize = force_capitalize or context.capitalization_class == 1
        cased = self.apply_true_casing(context.token, capitalize)
        mark = self.get_punctuation(
            context.punctuation_class,
            context.segmentation_class,
            context.token,
            context.next_token,
            context.previous_token,
        )
        return cased, mark

    def get_punctuation(self,
                        punctuation_class: int,
                        segmentation_class: int,
                        token: str,
                        next_token: Optional[str],
                        previous_token: Optional[str]) -> str:
        """Decide which mark, if any, follows token.

        Periods, question marks and segmentation boundaries end the sentence
        unless the token is non-terminal; a question mark is kept, everything
        else unifies to a period. Commas survive only before a trigger word or
        after a preposition + capitalized token ("in London,").

        Returns:
            '.', '?', ',' or ''
        """
        raw_mark = mark_for_class(punctuation_class)

        could_be_end_mark = raw_mark in ('.', '?')
        seg_boundary = (segmentation_class == 1
                        and self.is_potential_sentence_boundary(token, next_token, previous_token))

        if (could_be_end_mark or seg_boundary) and not self.is_non_terminal(token):
            if raw_mark == '?':
                return '?'
            return '.'

        if raw_mark == ',':
            if next_token and next_token.lower() in self.lexicon.comma_triggers:
                return ','
            if (token
                    and previous_token
                    and previous_token.lower() in self.lexicon.comma_prepositions
                    and token[0].isupper()):
                return ','
            return ''

        return raw_mark

    def is_non_terminal(self, word: Optional[str]) -> bool:
        """True when word should not end a sentence (articles, prepositions, honorifics, bare numbers)."""
        if not word:
            return False
        lower = word.lower()
        return lower in self.lexicon.non_terminal_words or bool(_DIGITS.fullmatch(lower))

    def is_potential_sentence_boundary(self,
                                       token: Optional[str],
                                       next_token: Optional[str],
                                       previous_token: Optional[str] = None) -> bool:
        """Context check backing a segmentation prediction.

        A boundary is plausible when the next token is a subject pronoun, a
        capitalized word that is neither non-terminal nor a conjunction, the
        token is a speech verb, or the token is a number not followed by a
        unit/suffix.
        """
        if not token or not next_token:
            return False

        lexicon = self.lexicon
        next_lower = next_token.lower()

        if next_lower in lexicon.boundary_pronouns:
            return True

        if (next_token[0].isupper()
                and next_lower not in lexicon.non_terminal_words
                and next_lower not in lexicon.coordinating_conjunctions):
            return True

        if token.lower() in lexicon.speech_verbs:
            return True

        if _DIGITS.fullmatch(token):
            return not (next_lower in lexicon.numeric_suffixes or _SINGLE_DIGIT.fullmatch(next_lower))

        return False

    def apply_true_casing(self, word: str, capitalize: bool) -> str:
        """Capitalize or lowercase word.

        "i" is always "I". Otherwise the word is capitalized (first letter
        upper, rest lower) when requested or when it looks like a proper noun,
        and lowercased in every other case.
        """
        if not word:
            return word

        if word.lower() == 'i':
            return 'I'

        if capitalize or self.is_proper_noun(word):
            return word[0].upper() + word[1:].lower()

        return word.lower()

    def is_proper_noun(self, word: str) -> bool:
        """Honorifics (optionally with a trailing period), weekdays and months."""
        lower = word.lower()
        if lower.endswith('.') and lower[:-1] in self.lexicon.honorifics:
            return True
        return lower in self.lexicon.honorifics or lower in self.lexicon.calendar_names
