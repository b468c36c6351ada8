# punctrestore/postprocessing/Lexicon.py
"""Word lists driving the punctuation, boundary and casing heuristics.

The lists are empirically tuned. They are kept as immutable sets on a frozen
dataclass so they can be overridden from configuration without a mutation path.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class Lexicon:
    """Immutable collection of lowercase word sets used by RestorationEngine."""

    # Next-token words that justify keeping a predicted comma
    comma_triggers: frozenset[str] = frozenset({
        'and', 'but', 'or', 'nor', 'for', 'yet', 'so',
        'however', 'therefore', 'moreover', 'furthermore',
        'nevertheless', 'meanwhile', 'consequently',
        'instead', 'indeed', 'namely', 'specifically',
        'additionally', 'similarly', 'likewise',
        'hence', 'thus', 'still', 'otherwise',
        'rather', 'accordingly', 'finally',
    })

    # Words that shouldn't end a sentence
    non_terminal_words: frozenset[str] = frozenset({
        'the', 'a', 'an', 'this', 'that', 'these', 'those',
        'my', 'your', 'his', 'her', 'its', 'our', 'their',
        'in', 'on', 'at', 'by', 'for', 'with', 'to', 'of',
        'mr', 'ms', 'mrs', 'dr', 'prof',
    })

    # Previous-token prepositions that keep a comma after a capitalized token ("in London,")
    comma_prepositions: frozenset[str] = frozenset({'in', 'at', 'on', 'from', 'to'})

    honorifics: frozenset[str] = frozenset({'mr', 'ms', 'mrs', 'dr', 'prof'})

    calendar_names: frozenset[str] = frozenset({
        'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday',
        'january', 'february', 'march', 'april', 'may', 'june', 'july',
        'august', 'september', 'october', 'november', 'december',
    })

    # Pronouns that usually open a new sentence
    boundary_pronouns: frozenset[str] = frozenset({'he', 'she', 'it', 'they', 'we', 'i'})

    # Capitalized next tokens that still don't start a sentence
    coordinating_conjunctions: frozenset[str] = frozenset({'and', 'but', 'or', 'nor', 'for', 'yet', 'so'})

    speech_verbs: frozenset[str] = frozenset({
        'said', 'replied', 'asked', 'thought', 'wondered', 'exclaimed', 'continued',
    })

    # Tokens after a number that keep it inside the sentence ("3 pm", "3 weeks");
    # any single digit is matched separately
    numeric_suffixes: frozenset[str] = frozenset({
        'am', 'pm', 'th', 'st', 'nd', 'rd', 'dollars', 'cents', 'years', 'days', 'months', 'weeks',
    })

    @classmethod
    def from_config(cls, overrides: Mapping[str, Any] | None) -> "Lexicon":
        """Build a lexicon replacing the named sets.

        Args:
            overrides: Mapping of field name to an iterable of words, e.g.
                {"comma_prepositions": ["in", "at"]}. Unknown keys and values that
                are not lists raise ValueError.

        Returns:
            Lexicon with lowercased frozensets for the overridden fields
        """
        if not overrides:
            return DEFAULT_LEXICON

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown lexicon sets: {sorted(unknown)}")

        not_lists = sorted(name for name, words in overrides.items()
                           if not isinstance(words, (list, tuple, set, frozenset)))
        if not_lists:
            raise ValueError(f"Lexicon sets must be lists of words: {not_lists}")

        return replace(
            DEFAULT_LEXICON,
            **{name: frozenset(word.lower() for word in words) for name, words in overrides.items()}
        )


DEFAULT_LEXICON = Lexicon()
