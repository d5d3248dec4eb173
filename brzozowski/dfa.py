# -*- coding: utf-8 -*-
import logging
from collections import defaultdict, namedtuple
from typing import Dict  # noqa
from typing import FrozenSet  # noqa
from typing import Iterable  # noqa
from typing import List  # noqa
from typing import Optional  # noqa
from typing import Sequence  # noqa

import networkx as nx


logger = logging.getLogger(__name__)


class BrzozowskiError(Exception):
    pass


class InvalidTransitionError(BrzozowskiError):
    """
    A (state, symbol) pair did not resolve to exactly one transition.

    This means the automaton is broken, or was queried with a symbol outside
    the alphabet it was built for. It is never a normal rejection.
    """
    def __init__(self, state, symbol, matches):
        self.state = state
        self.symbol = symbol
        self.matches = matches
        super(InvalidTransitionError, self).__init__(
            'Invalid transition from state %s on symbol %r (%d matching transitions)' % (
                state.label, symbol, len(matches)))


class StateLimitExceededError(BrzozowskiError):
    pass


class EmptyLanguageError(BrzozowskiError):
    pass


class InfiniteLanguageError(BrzozowskiError):
    pass


String = str

# All printable ASCII characters. http://www.catonmat.net/blog/my-favorite-regex/
PRINTABLE_ASCII = ''.join(map(chr, range(ord(' '), ord('~') + 1)))  # type: str


State = namedtuple('State', ['label'])
State.__doc__ = """
A DFA state, named by the canonical form of the language it recognizes.
"""

Transition = namedtuple('Transition', ['from_state', 'to_state', 'symbol'])


class DFA(object):
    """
    An immutable deterministic finite automaton.

    Transitions are indexed by (state, symbol) when the DFA is created, but
    lookups still report every match so that a malformed automaton is
    detected rather than silently resolved.
    """

    def __init__(self, states, transitions, start, accept, alphabet=None):
        # type: (Iterable[State], Iterable[Transition], State, Iterable[State], Optional[Iterable[String]]) -> None
        self._states = frozenset(states)  # type: FrozenSet[State]
        self._transitions = frozenset(transitions)  # type: FrozenSet[Transition]
        self._start = start
        self._accept = frozenset(accept)  # type: FrozenSet[State]
        if alphabet is None:
            alphabet = {transition.symbol for transition in self._transitions}
        self._alphabet = tuple(sorted(set(alphabet)))

        if start not in self._states:
            raise ValueError('Start state %r is not a state of the DFA.' % (start, ))
        if not self._accept <= self._states:
            raise ValueError('Accepting states must be states of the DFA.')

        # Index of (state, symbol): matching transitions. In the literature, this
        # is usually denoted 𝛿.
        self._delta = defaultdict(list)  # type: defaultdict[tuple, List[Transition]]
        for transition in self._transitions:
            if not (transition.from_state in self._states and
                    transition.to_state in self._states):
                raise ValueError('Transition %r refers to an unknown state.' % (transition, ))
            self._delta[transition.from_state, transition.symbol].append(transition)

    @property
    def states(self):  # type: () -> FrozenSet[State]
        return self._states

    @property
    def transitions(self):  # type: () -> FrozenSet[Transition]
        return self._transitions

    @property
    def start(self):  # type: () -> State
        return self._start

    @property
    def accept(self):  # type: () -> FrozenSet[State]
        return self._accept

    @property
    def alphabet(self):  # type: () -> Sequence[String]
        return self._alphabet

    def is_accepting(self, state):  # type: (State) -> bool
        return state in self._accept

    def find_transition(self, state, symbol):  # type: (State, String) -> State
        matches = self._delta.get((state, symbol), [])
        if len(matches) != 1:
            raise InvalidTransitionError(state, symbol, matches)
        return matches[0].to_state

    def next_states(self, state):  # type: (State) -> Dict[String, State]
        return {symbol: self.find_transition(state, symbol) for symbol in self._alphabet}

    def accepts(self, string):  # type: (Iterable[String]) -> bool
        state = self._start
        for symbol in string:
            state = self.find_transition(state, symbol)
        return state in self._accept

    def find_invalid_states(self):  # type: () -> List[State]
        """
        Returns a list of states which do not have exactly one transition for
        every element of the alphabet.

        If this method returns a non-empty list, `accepts` and the generators
        may raise InvalidTransitionError.
        """
        symbols_by_state = defaultdict(list)  # type: defaultdict[State, List[String]]
        for transition in self._transitions:
            symbols_by_state[transition.from_state].append(transition.symbol)
        invalid_states = []
        for state in self._states:
            symbols = symbols_by_state[state]
            if len(symbols) != len(set(symbols)) or set(symbols) != set(self._alphabet):
                invalid_states.append(state)
        return sorted(invalid_states)

    @property
    def as_multidigraph(self):  # type: () -> nx.MultiDiGraph
        """
        Constructs a MultiDiGraph with a node per state and an edge per
        transition. The graph is a copy, so callers may modify it.
        """
        graph = nx.MultiDiGraph()
        for state in self._states:
            accepting = state in self._accept
            graph.add_node(
                state,
                label=state.label,
                accepting=accepting,
                color='green' if accepting else 'black',
            )
        for transition in self._transitions:
            graph.add_edge(
                transition.from_state, transition.to_state,
                symbol=transition.symbol,
                label=transition.symbol,
            )
        return graph

    @property
    def reachable_states(self):  # type: () -> FrozenSet[State]
        graph = self.as_multidigraph
        return frozenset(nx.descendants(graph, self._start) | {self._start})

    def _with_accepting_sink(self, graph):
        # Add a "sink" node with an in-edge from every accepting state. This is
        # is solely done because the networkx API makes it easier to find the
        # ancestor of a node than a set of nodes.
        sink = object()
        graph.add_node(sink)
        for state, accepting in list(graph.nodes(data='accepting')):
            if accepting:
                graph.add_edge(state, sink)
        return nx.ancestors(graph, sink)

    @property
    def _acceptable_subgraph(self):  # type:  () -> nx.MultiDiGraph
        graph = self.as_multidigraph
        reachable_states = nx.descendants(graph, self._start) | {self._start}
        graph = graph.subgraph(reachable_states).copy()
        acceptable_states = self._with_accepting_sink(graph)
        return graph.subgraph(acceptable_states)

    @property
    def live_subgraph(self):  # type: () -> nx.MultiDiGraph
        """
        Returns the graph of "live" states for this graph, i.e. the start state
        together with states that may be involved in positively matching a string
        (reachable from the start node and an ancestor of an accepting node).

        This is intended for display purposes, only showing the paths which
        might lead to an accepting state, or just the start state if no such
        paths exist.
        """
        graph = self.as_multidigraph
        descendants = nx.descendants(graph, self._start)
        live_states = {self._start} | (self._with_accepting_sink(graph) & descendants)
        return self.as_multidigraph.subgraph(live_states)

    @property
    def is_empty(self):  # type: () -> bool
        return len(self._acceptable_subgraph) == 0

    @property
    def has_finite_language(self):  # type: () -> bool
        """
        Returns True iff this DFA recognizes a finite (possibly empty) language.

        - Remove states which are unreachable or cannot reach an accepting
          state.
        - The language is finite iff the remaining graph is acyclic.
        """
        return nx.is_directed_acyclic_graph(self._acceptable_subgraph)

    @property
    def longest_string(self):  # type: () -> String
        """
        Returns an example of a maximally long string accepted by this DFA.

        If the language is infinite, raises InfiniteLanguageError.
        If the language is empty, raises EmptyLanguageError.
        """
        acceptable_subgraph = self._acceptable_subgraph
        if len(acceptable_subgraph) == 0:
            raise EmptyLanguageError()

        # networkx topologically sorts the graph to find the longest path,
        # which fails with NetworkXUnfeasible when there is a cycle, i.e. when
        # the language is infinite. Every state in the acceptable subgraph is
        # reachable from the start, so on a DAG the longest path begins there.
        try:
            longest_path = nx.dag_longest_path(acceptable_subgraph)
        except nx.NetworkXUnfeasible:
            raise InfiniteLanguageError()
        if not longest_path:
            longest_path = [self._start]

        symbols = []
        for state1, state2 in zip(longest_path, longest_path[1:]):
            edges = acceptable_subgraph.succ[state1][state2]
            symbols.append(min(edge['symbol'] for edge in edges.values()))
        return ''.join(symbols)

    def __repr__(self):
        return '<DFA: %d states, %d transitions, start=%s>' % (
            len(self._states), len(self._transitions), self._start.label)


def accepts(dfa, string):  # type: (DFA, Iterable[String]) -> bool
    return dfa.accepts(string)
