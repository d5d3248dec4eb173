from typing import Iterable  # noqa

from .derivative import RegularLanguage  # noqa
from .derivative import EMPTY, EPSILON, Character, Concat, Concatenation, Star, Union  # noqa
from .derivative import derivative, matches, nullable, reduce, simplify, to_canonical_string  # noqa
from .construction import all_derivatives, build_dfa  # noqa
from .dfa import DFA, PRINTABLE_ASCII, State, String, Transition, accepts  # noqa
from .dfa import (  # noqa
    BrzozowskiError, EmptyLanguageError, InfiniteLanguageError, InvalidTransitionError,
    StateLimitExceededError)
from .generation import DeterministicLanguageGenerator, RandomLanguageGenerator  # noqa


def literal(string):  # type: (String) -> RegularLanguage
    """
    The language containing exactly `string`.
    """
    language = EPSILON  # type: RegularLanguage
    for char in reversed(string):
        language = Character(char) if language is EPSILON else Character(char) + language
    return language


def one_of(chars):  # type: (Iterable[String]) -> RegularLanguage
    """
    The language of single characters drawn from `chars`.
    """
    language = EMPTY  # type: RegularLanguage
    for char in reversed(sorted(set(chars))):
        language = Character(char) if language is EMPTY else Character(char) | language
    return language
