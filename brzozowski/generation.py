# -*- coding: utf-8 -*-
import logging
import random
from bisect import bisect_right
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple  # noqa

import networkx as nx
import numpy as np

from brzozowski.dfa import DFA, State, String  # noqa
from brzozowski.dfa import EmptyLanguageError
from brzozowski.dfa import InfiniteLanguageError


logger = logging.getLogger(__name__)


class InvalidDistributionError(Exception):
    pass


class _Distribution(list):
    pass


class DiscreteRandomVariable(_Distribution):
    def __init__(self, weights):  # type: (List[float]) -> None
        total = sum(weights, 0.0)
        if total == 0:
            raise InvalidDistributionError()
        super(DiscreteRandomVariable, self).__init__(
            weight / total for weight in weights)
        for i in range(1, len(self)):
            # Build the right endpoints to sample from.
            self[i] += self[i - 1]

    def draw(self, random=random):
        """
        Draw an index according to the probabilities in `weights`.
        """
        return min(bisect_right(self, random.random()), len(self) - 1)


class PositiveSupport(_Distribution):
    """
    The indices with non-zero weight, in increasing order.
    """
    def __init__(self, weights):  # type: (List[float]) -> None
        super(PositiveSupport, self).__init__(
            i for i, weight in enumerate(weights) if weight > 0)
        if not self:
            raise InvalidDistributionError()

    def draw(self, random=random):
        return self[0]


class PathWeights(object):

    def __init__(self, dfa, states):  # type: (DFA, List[State]) -> None
        """
        Class for maintaining state path weights inside a dfa.

        This is a renormalized version of l_{p,n} in section 2 of the Bernardi
        & Giménez paper, computed using matrix powers. See:
        https://en.wikipedia.org/wiki/Adjacency_matrix#Matrix_powers

        Note that ``path_weights[index, n]`` is the proportion of paths of
        length n from ``states[index]`` to _some_ accepting state.
        """
        self.longest_path_length = 0

        graph = dfa.as_multidigraph
        sink = object()
        graph.add_node(sink)
        for state in dfa.accept:
            graph.add_edge(state, sink)

        # Parallel edges are summed, so entry (p, q) counts the symbols
        # leading from p to q.
        self.matrix = nx.to_numpy_array(graph, nodelist=list(states) + [sink], weight=None)
        vect = np.zeros(self.matrix.shape[0])
        vect[-1] = 1.0  # Grabs the neighborhood of the sink node (last column).
        self.vects = [self.normalize_vector(self.matrix.dot(vect))]

    @staticmethod
    def normalize_vector(vector):
        total = np.sum(vector)
        return vector if total == 0 else vector / total

    def __getitem__(self, item):  # type: (Tuple[int, int]) -> float
        index, path_length = item
        while path_length > self.longest_path_length:
            self.longest_path_length += 1
            self.vects.append(self.normalize_vector(self.matrix.dot(self.vects[-1])))
        return float(self.vects[path_length][index])


class BaseGenerator(object):
    distribution_type = _Distribution

    def __init__(self, dfa):  # type: (DFA) -> None
        if dfa.find_invalid_states():
            raise ValueError('Must use a valid DFA.')
        self.dfa = dfa
        self.alphabet = list(dfa.alphabet)

        # States are numbered with the start state first, so that lists can be
        # used instead of hash tables.
        self.states = [dfa.start] + sorted(dfa.states - {dfa.start})
        index = {state: i for i, state in enumerate(self.states)}
        self.start = 0
        self.accepting = [dfa.is_accepting(state) for state in self.states]
        self.delta = [
            [index[dfa.find_transition(state, char)] for char in self.alphabet]
            for state in self.states
        ]

        # Denoted by l_{p,n} in section 2 of the Bernardi & Giménez paper,
        # path_weights[state, n] is the proportion of paths of length n from
        # state to _some_ accepting state. The weights are normalized at each
        # length so they're always between 0 and 1 and never overflow.
        self.path_weights = PathWeights(dfa, self.states)
        self.node_length_to_character_dist = {}  # type: Dict[Tuple[int, int], Optional[_Distribution]]

    def get_dist_for_node_and_length(self, node, length):
        # type: (int, int) -> Optional[_Distribution]
        if (node, length) not in self.node_length_to_character_dist:
            try:
                dist = self.distribution_type([
                    self.path_weights[self.delta[node][i], length - 1]
                    for i in range(len(self.alphabet))
                ])  # type: Optional[_Distribution]
            except InvalidDistributionError:
                # There are no paths of the given length.
                dist = None
            self.node_length_to_character_dist[(node, length)] = dist
        return self.node_length_to_character_dist[(node, length)]

    def generate_string(self, length):  # type: (int) -> Optional[String]
        """
        Return a string accepted by the DFA of the given length.

        Returns `None` if no such string exists.
        """
        node = self.start
        chars = []
        if length == 0:
            return '' if self.accepting[node] else None
        elif self.path_weights[node, length] == 0:
            return None  # No paths of the given length.
        for i in range(length):
            dist = self.get_dist_for_node_and_length(node, length - i)
            if dist is None:  # pragma: no cover
                return None
            char_index = dist.draw()
            chars.append(self.alphabet[char_index])
            node = self.delta[node][char_index]
        return ''.join(chars)

    def valid_lengths_iter(self):  # type: () -> Iterator[int]
        """
        Iterates over the lengths of accepted strings, in increasing order.
        """
        try:
            longest_string = self.dfa.longest_string
            iterator = iter(range(len(longest_string) + 1))
        except EmptyLanguageError:
            # No valid lengths.
            iterator = iter(())
        except InfiniteLanguageError:
            iterator = count()

        for length in iterator:
            if self.path_weights[self.start, length] > 0:
                yield length


class RandomLanguageGenerator(BaseGenerator):
    """
    Based off the "Recursive RGA" algorithm described in Bernardi & Giménez,
    "A Linear Algorithm for the Random Generation of Regular Languages"
    Algorithmica. February 2012, Volume 62, Issue 1, pp 130–145

    Preprint available at: http://people.brandeis.edu/~bernardi/publications/regular-sampling.pdf

    The idea is to precompute the number of of paths from each state to an
    accepting state, then use those to get a probability distribution for
    selecting transitions, so strings of a given length are drawn uniformly.
    """
    distribution_type = DiscreteRandomVariable


class DeterministicLanguageGenerator(BaseGenerator):
    distribution_type = PositiveSupport

    def matching_strings_iter(self):  # type: () -> Iterator[String]
        """
        Returns an iterator on all strings accepted by the DFA, shortest first
        and in alphabet order within a length.

        Each string will be included exactly once.
        """
        def strings(node, stack, remaining_length):
            if remaining_length == 0:
                if self.accepting[node]:
                    yield ''.join(stack)
                return

            for char_index in self.get_dist_for_node_and_length(node, remaining_length):
                stack.append(self.alphabet[char_index])
                next_node = self.delta[node][char_index]
                for s in strings(next_node, stack, remaining_length - 1):
                    yield s
                stack.pop()

        for length in self.valid_lengths_iter():
            logger.debug('Enumerating accepted strings of length %d', length)
            for s in strings(self.start, [], length):
                yield s
