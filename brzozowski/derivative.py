# -*- coding: utf-8 -*-
"""
Regular languages and their Brzozowski derivatives.

A language is built by the caller out of the six forms below; nothing here
parses regex syntax. Constructors never simplify, so derivatives are taken
exactly as defined and then cleaned up with `simplify` / `reduce`.

See also https://en.wikipedia.org/wiki/Brzozowski_derivative
"""
import functools
import operator
from typing import List  # noqa
from typing import Sequence  # noqa

from brzozowski.dfa import String, DFA  # noqa


@functools.total_ordering
class RegularLanguage(object):
    """
    A regular language, one of:
        - ∅:             EMPTY
        - ε:             EPSILON
        - Character:     Character(c)
        - Union:         L1 | L2
        - Concatenation: L1 + L2
        - Star:          Star(L)

    Values are immutable and compared structurally, so they can be used as
    set members and dictionary keys.
    """
    def as_dfa(self, alphabet, max_states=None):
        # type: (Sequence[String], int) -> DFA
        from brzozowski.construction import build_dfa
        return build_dfa(self, alphabet, max_states=max_states)

    def __add__(self, other):
        return Concatenation(self, other)

    def __or__(self, other):
        return Union(self, other)

    def __mul__(self, repeat):  # type: (int) -> RegularLanguage
        if repeat == 0:
            return EPSILON
        return functools.reduce(operator.add, [self] * repeat)

    __rmul__ = __mul__

    @property
    def nullable(self):  # type: () -> bool
        """
        Whether the empty string belongs to this language.
        """
        raise NotImplementedError

    def derivative(self, char):  # type: (String) -> RegularLanguage
        raise NotImplementedError

    def simplify(self):  # type: () -> RegularLanguage
        raise NotImplementedError

    @property
    def size(self):  # type: () -> int
        return 1

    def alternatives(self):  # type: () -> List[RegularLanguage]
        """
        The operands of this language when read as a flattened union.
        """
        return [self]

    def match(self, string):  # type: (String) -> bool
        language = self
        for char in string:
            language = language.derivative(char)
        return language.nullable

    @property
    def identity_tuple(self):
        return (type(self).__name__, )

    def __hash__(self):
        return hash(self.identity_tuple)

    def __eq__(self, other):
        return type(self) == type(other) and self.identity_tuple == other.identity_tuple

    def __ne__(self, other):
        return not (self == other)

    def __lt__(self, other):
        if not isinstance(other, RegularLanguage):  # pragma: no cover
            raise TypeError(type(other))
        return self.identity_tuple < other.identity_tuple


class _Empty(RegularLanguage):
    def __new__(cls):
        try:
            return EMPTY
        except NameError:
            return super(_Empty, cls).__new__(cls)

    nullable = False

    def derivative(self, char):  # type: (String) -> RegularLanguage
        return EMPTY

    def simplify(self):
        return self

    def __str__(self):
        return '∅'

    def __repr__(self):
        return 'EMPTY'


EMPTY = _Empty()


class _Epsilon(RegularLanguage):
    def __new__(cls):
        try:
            return EPSILON
        except NameError:
            return super(_Epsilon, cls).__new__(cls)

    nullable = True

    def derivative(self, char):  # type: (String) -> RegularLanguage
        return EMPTY

    def simplify(self):
        return self

    def __str__(self):
        return 'ε'

    def __repr__(self):
        return 'EPSILON'


EPSILON = _Epsilon()


# Characters which are part of the printed syntax. They are escaped in labels
# so that two different languages never print the same way.
METACHARS = frozenset('()*∪∅ε\\ ')


class Character(RegularLanguage):
    char = None  # type: String

    def __init__(self, char):  # type: (String) -> None
        if not isinstance(char, str) or len(char) != 1:
            raise ValueError('A character must be a string of length 1: %r' % (char, ))
        self.char = char

    nullable = False

    def derivative(self, char):  # type: (String) -> RegularLanguage
        return EPSILON if char == self.char else EMPTY

    def simplify(self):
        return self

    @property
    def identity_tuple(self):
        return (type(self).__name__, self.char)

    def __str__(self):
        if self.char in METACHARS:
            return '\\' + self.char
        return self.char

    def __repr__(self):
        return 'Character(%r)' % self.char


class _Binary(RegularLanguage):
    left = None  # type: RegularLanguage
    right = None  # type: RegularLanguage

    def __init__(self, left, right):
        # type: (RegularLanguage, RegularLanguage) -> None
        self.left = left
        self.right = right
        self._hash = hash(self.identity_tuple)

    @property
    def size(self):
        return 1 + self.left.size + self.right.size

    @property
    def identity_tuple(self):
        return (type(self).__name__, self.left, self.right)

    def __hash__(self):
        return self._hash


class Union(_Binary):
    @property
    def nullable(self):
        return self.left.nullable or self.right.nullable

    def derivative(self, char):  # type: (String) -> RegularLanguage
        return Union(self.left.derivative(char), self.right.derivative(char))

    def simplify(self):
        if self.left is EMPTY:
            return self.right.simplify()
        elif self.right is EMPTY:
            return self.left.simplify()
        # Normalize modulo associativity, commutativity and idempotence, so
        # that similar derivatives compare equal. Without this, a language
        # like (a*)(a*) has infinitely many distinct derivatives.
        alternatives = set()  # type: set
        for child in (self.left.simplify(), self.right.simplify()):
            alternatives.update(child.alternatives())
        alternatives.discard(EMPTY)
        return union_of(sorted(alternatives))

    def alternatives(self):  # type: () -> List[RegularLanguage]
        return self.left.alternatives() + self.right.alternatives()

    def __str__(self):
        return '(%s ∪ %s)' % (self.left, self.right)

    def __repr__(self):
        return 'Union(%r, %r)' % (self.left, self.right)


def union_of(alternatives):  # type: (Sequence[RegularLanguage]) -> RegularLanguage
    """
    Right-nested union of `alternatives`, or EMPTY if there are none.
    """
    if not alternatives:
        return EMPTY
    language = alternatives[-1]
    for alternative in reversed(alternatives[:-1]):
        language = Union(alternative, language)
    return language


class Concatenation(_Binary):
    @property
    def nullable(self):
        return self.left.nullable and self.right.nullable

    def derivative(self, char):
        """
        If the left side can match the empty string, the character may also be
        consumed by the right side, so both possibilities are kept.
        """
        consumed_left = Concatenation(self.left.derivative(char), self.right)
        if not self.left.nullable:
            return consumed_left
        return Union(consumed_left, self.right.derivative(char))

    def simplify(self):
        if self.left is EPSILON:
            return self.right.simplify()
        elif self.right is EPSILON:
            return self.left.simplify()
        elif self.left is EMPTY or self.right is EMPTY:
            return EMPTY
        return Concatenation(self.left.simplify(), self.right.simplify())

    def __str__(self):
        return '(%s%s)' % (self.left, self.right)

    def __repr__(self):
        return 'Concatenation(%r, %r)' % (self.left, self.right)


Concat = Concatenation


class Star(RegularLanguage):
    language = None  # type: RegularLanguage

    def __init__(self, language):  # type: (RegularLanguage) -> None
        self.language = language
        self._hash = hash(self.identity_tuple)

    nullable = True

    def derivative(self, char):  # type: (String) -> RegularLanguage
        return Concatenation(self.language.derivative(char), self)

    def simplify(self):
        # ∅* and ε* both denote {ε}.
        if self.language is EMPTY or self.language is EPSILON:
            return EPSILON
        return Star(self.language.simplify())

    @property
    def size(self):
        return 1 + self.language.size

    @property
    def identity_tuple(self):
        return (type(self).__name__, self.language)

    def __hash__(self):
        return self._hash

    def __str__(self):
        return '(%s*)' % self.language

    def __repr__(self):
        return 'Star(%r)' % self.language


def derivative(language, char):  # type: (RegularLanguage, String) -> RegularLanguage
    return language.derivative(char)


def nullable(language):  # type: (RegularLanguage) -> bool
    return language.nullable


def simplify(language):  # type: (RegularLanguage) -> RegularLanguage
    """
    A single simplification pass. Simplifying a child can enable a further
    simplification of its parent, so this is not necessarily a fixpoint; see
    `reduce`.
    """
    return language.simplify()


def reduce(language):  # type: (RegularLanguage) -> RegularLanguage
    """
    Simplify `language` until it stops changing.

    This terminates because `simplify` never increases `size`.
    """
    previous = language
    reduced = simplify(previous)
    while reduced != previous:
        previous = reduced
        reduced = simplify(previous)
    return reduced


def matches(language, string):  # type: (RegularLanguage, String) -> bool
    return language.match(string)


def size(language):  # type: (RegularLanguage) -> int
    return language.size


def to_canonical_string(language):  # type: (RegularLanguage) -> String
    """
    Print `language` in the form used to name DFA states, e.g. "((a*) ∪ b)".
    """
    return str(language)
