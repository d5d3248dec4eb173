# -*- coding: utf-8 -*-
"""
DFA construction from Brzozowski derivatives.

Based of the construction here: https://drona.csa.iisc.ernet.in/~deepakd/fmcs-06/seminars/presentation.pdf  # noqa
States are named by the canonical form of the language that is matched
starting from that state. In particular, the start state is labeled with the
reduced input language.
"""
import logging
from typing import FrozenSet  # noqa
from typing import Iterable  # noqa
from typing import List  # noqa
from typing import Optional  # noqa
from typing import Sequence  # noqa
from typing import Set  # noqa

from brzozowski.derivative import RegularLanguage  # noqa
from brzozowski.derivative import derivative, nullable, reduce, to_canonical_string
from brzozowski.dfa import DFA, State, StateLimitExceededError, String, Transition


logger = logging.getLogger(__name__)

# No limit on the number of states explored by default.
DEFAULT_MAX_STATES = None  # type: Optional[int]


def normalize_alphabet(alphabet):  # type: (Iterable[String]) -> Sequence[String]
    """
    Returns the distinct symbols of `alphabet` in sorted order.

    A string is treated as a sequence of one-character symbols.
    """
    if alphabet is None:
        raise ValueError('An alphabet must be given explicitly.')
    symbols = set()  # type: Set[String]
    for symbol in alphabet:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError('Alphabet symbols must be strings of length 1: %r' % (symbol, ))
        symbols.add(symbol)
    return tuple(sorted(symbols))


def to_state(language):  # type: (RegularLanguage) -> State
    return State(to_canonical_string(language))


def all_derivatives(alphabet, language, max_states=DEFAULT_MAX_STATES):
    # type: (Iterable[String], RegularLanguage, Optional[int]) -> FrozenSet[RegularLanguage]
    """
    Returns every distinct reduced language reachable from `language` by
    taking derivatives with respect to symbols of `alphabet`.

    Every language is reduced to a fixpoint before it is compared, so two
    derivatives which only differ before reduction are one state.
    """
    alphabet = normalize_alphabet(alphabet)
    start = reduce(language)
    logger.debug('Exploring derivatives of %s over %d symbols', start, len(alphabet))

    to_explore = [start]  # type: List[RegularLanguage]
    explored = set()  # type: Set[RegularLanguage]
    while to_explore:
        node = to_explore.pop()
        if node in explored:
            continue
        for char in alphabet:
            to_explore.append(reduce(derivative(node, char)))
        explored.add(node)
        if max_states is not None and len(explored) > max_states:
            logger.warning(
                'Gave up on %s after exploring %d derivatives', start, len(explored))
            raise StateLimitExceededError(
                'More than %d distinct derivatives of %s' % (max_states, start))

    logger.debug('Found %d distinct derivatives of %s', len(explored), start)
    return frozenset(explored)


def build_dfa(language, alphabet, max_states=DEFAULT_MAX_STATES):
    # type: (RegularLanguage, Iterable[String], Optional[int]) -> DFA
    """
    Builds a DFA accepting exactly the strings over `alphabet` in `language`.

    Each state has one transition per symbol of `alphabet`, and a state is
    accepting iff its language contains the empty string.
    """
    alphabet = normalize_alphabet(alphabet)
    start = reduce(language)
    derivatives = {
        reduce(derived)
        for derived in all_derivatives(alphabet, start, max_states=max_states)}

    states = {to_state(language) for language in derivatives} | {to_state(start)}
    assert len(states) == len(derivatives | {start}), 'Distinct languages share a label.'

    transitions = {
        Transition(
            to_state(language),
            to_state(reduce(derivative(language, char))),
            char,
        )
        for language in derivatives
        for char in alphabet
    }
    accept = {to_state(language) for language in derivatives if nullable(language)}
    return DFA(
        states=states,
        transitions=transitions,
        start=to_state(start),
        accept=accept,
        alphabet=alphabet,
    )
