# -*- coding: utf-8 -*-
import logging

import pytest
from hypothesis import given, example, settings

from brzozowski import build_dfa, literal, one_of
from brzozowski.construction import all_derivatives, to_state
from brzozowski.derivative import (
    EMPTY, EPSILON, Character, Star, matches, nullable, reduce, to_canonical_string)
from brzozowski.dfa import PRINTABLE_ASCII, State, StateLimitExceededError, Transition
from brzozowski.tests.strategies import ALPHABET, languages, strings


a, b = map(Character, 'ab')


def labels(states):
    return {state.label for state in states}


def test_single_character():
    dfa = build_dfa(a, alphabet='ab')
    assert labels(dfa.states) == {'a', 'ε', '∅'}
    assert dfa.start == State('a')
    assert dfa.accept == {State('ε')}
    assert dfa.accepts('a')
    assert not dfa.accepts('')
    assert not dfa.accepts('b')
    assert not dfa.accepts('aa')


def test_union():
    dfa = build_dfa(a | b, alphabet='ab')
    assert dfa.accepts('a')
    assert dfa.accepts('b')
    assert not dfa.accepts('ab')
    assert not dfa.accepts('')


def test_star_is_a_single_state():
    dfa = build_dfa(Star(a), alphabet='a')
    assert dfa.states == {State('(a*)')}
    assert dfa.transitions == {Transition(State('(a*)'), State('(a*)'), 'a')}
    assert dfa.accept == {dfa.start}
    assert dfa.accepts('')
    assert dfa.accepts('aaaa')


def test_concatenation():
    dfa = build_dfa(a + b, alphabet='ab')
    assert labels(dfa.states) == {'(ab)', 'b', 'ε', '∅'}
    assert dfa.accepts('ab')
    assert not dfa.accepts('ba')
    assert not dfa.accepts('a')


def test_empty_language():
    dfa = build_dfa(EMPTY, alphabet='a')
    assert dfa.states == {State('∅')}
    assert dfa.transitions == {Transition(State('∅'), State('∅'), 'a')}
    assert not dfa.accept
    assert not dfa.accepts('')
    assert not dfa.accepts('a')


def test_start_is_reduced():
    dfa = build_dfa((EPSILON + b) | (a + EMPTY), alphabet='ab')
    assert dfa.start == State('b')


def test_similar_derivatives_terminate():
    # Without union normalization the derivatives of (a*)(a*) grow forever.
    dfa = build_dfa(Star(a) + Star(a), alphabet='a')
    assert labels(dfa.states) == {'((a*)(a*))', '(((a*)(a*)) ∪ (a*))'}
    assert dfa.accept == dfa.states
    assert all(dfa.accepts('a' * n) for n in range(6))


def test_printable_alphabet():
    dfa = literal('hi').as_dfa(PRINTABLE_ASCII)
    assert len(dfa.states) == 4
    assert dfa.accepts('hi')
    assert not dfa.accepts('hi!')
    assert not dfa.find_invalid_states()


def test_metacharacters_in_the_alphabet():
    # Character('∅') and EMPTY must not collapse into a single state.
    language = Character('∅') | Character('(')
    dfa = build_dfa(language, alphabet='∅(')
    assert len(dfa.states) == 3
    assert dfa.accepts('∅')
    assert dfa.accepts('(')
    assert not dfa.accepts('∅∅')


def test_alphabet_is_validated():
    with pytest.raises(ValueError):
        build_dfa(a, alphabet=None)
    with pytest.raises(ValueError):
        build_dfa(a, alphabet=['ab'])
    with pytest.raises(ValueError):
        build_dfa(a, alphabet=[1])


def test_empty_alphabet():
    dfa = build_dfa(Star(a), alphabet='')
    assert dfa.states == {State('(a*)')}
    assert not dfa.transitions
    assert dfa.accepts('')


def test_duplicate_symbols_are_ignored():
    dfa = build_dfa(a, alphabet='abba')
    assert dfa.alphabet == ('a', 'b')
    assert len(dfa.transitions) == 6


def test_all_derivatives():
    derivatives = all_derivatives('ab', a + b)
    assert derivatives == {a + b, b, EPSILON, EMPTY}
    assert all_derivatives('', a) == {a}


def test_state_limit(caplog):
    language = 4 * one_of('ab') + Star(a)
    assert len(all_derivatives('ab', language)) > 3
    with caplog.at_level(logging.WARNING, logger='brzozowski.construction'):
        with pytest.raises(StateLimitExceededError):
            build_dfa(language, alphabet='ab', max_states=3)
    assert 'Gave up' in caplog.text


@settings(deadline=None)
@given(languages, strings)
@example(Star(EMPTY), '')
@example(Star(a) + Star(a), 'aaa')
def test_dfa_agrees_with_derivative_matching(language, string):
    assert build_dfa(language, ALPHABET).accepts(string) == matches(language, string)


@settings(deadline=None)
@given(languages)
def test_dfa_is_total_and_deterministic(language):
    dfa = build_dfa(language, ALPHABET)
    assert not dfa.find_invalid_states()
    assert len(dfa.transitions) == len(dfa.states) * len(ALPHABET)
    for state in dfa.states:
        assert set(dfa.next_states(state)) == set(ALPHABET)


@settings(deadline=None)
@given(languages)
def test_accepting_states_are_nullable(language):
    dfa = build_dfa(language, ALPHABET)
    for derived in all_derivatives(ALPHABET, language):
        assert (to_state(derived) in dfa.accept) == nullable(derived)


@settings(deadline=None)
@given(languages)
def test_labels_are_injective(language):
    derivatives = all_derivatives(ALPHABET, language)
    assert len({to_canonical_string(derived) for derived in derivatives}) == len(derivatives)
    dfa = build_dfa(language, ALPHABET)
    assert len(dfa.states) == len(derivatives)
    assert dfa.reachable_states == dfa.states


@settings(deadline=None)
@given(languages)
def test_derivatives_are_reduced(language):
    for derived in all_derivatives(ALPHABET, language):
        assert reduce(derived) == derived
