# pylint: disable=missing-docstring
################################################################################
#
# Description: Context-free grammar model and static analysis
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.
################################################################################

import collections
import collections.abc
import io
import json
import logging
import math

from .error import (
    IntegrityError,
    InvalidGrammarError,
    ScanError,
    UndefinedSymbolError,
)
from .scanner import Nonterminal, nonterminals, scan

__all__ = ("Analysis", "DEFAULT_START", "Expansion", "Grammar")


DEFAULT_START = "<start>"

LOG = logging.getLogger("ebnffuzzer")
LOG.setLevel(logging.INFO)


Analysis = collections.namedtuple(
    "Analysis", "reachable unreachable undefined cycles"
)


class Expansion(object):
    """One alternative of a symbol: the expansion string and an optional
    annotation. The annotation is never looked at by the grammar, it is there for
    strategies (eg. ``WeightedStrategy`` reads it as a weight).
    """

    __slots__ = ("string", "opts", "tokens")

    def __init__(self, string, opts=None):
        if not isinstance(string, str):
            raise IntegrityError(
                "Expansion must be a string, got %s" % type(string).__name__
            )
        self.string = string
        self.opts = opts
        self.tokens = tuple(scan(string))

    def nonterminals(self):
        return [
            token.symbol for token in self.tokens if isinstance(token, Nonterminal)
        ]

    def __eq__(self, other):
        if not isinstance(other, Expansion):
            return NotImplemented
        return self.string == other.string and self.opts == other.opts

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        try:
            return hash((self.string, self.opts))
        except TypeError:
            return hash(self.string)

    def __str__(self):
        return self.string

    def __repr__(self):
        if self.opts is None:
            return "Expansion(%r)" % self.string
        return "Expansion(%r, %r)" % (self.string, self.opts)


def _nonterminals(expansion):
    if isinstance(expansion, Expansion):
        return expansion.nonterminals()
    return nonterminals(expansion)


class Grammar(collections.abc.Mapping):
    """A context-free grammar: each nonterminal symbol maps to its ordered
    alternatives.

    ::

        Grammar({
            "<start>": ["<digit><start>", "<digit>"],
            "<digit>": ["0", "1", ("2", 0.5)],
        })

    Alternatives can be given as plain strings, as ``(string, opts)`` pairs to
    attach an annotation, or as ``Expansion`` objects. The empty string is the
    empty expansion (epsilon). Symbols used in an alternative but missing as a key
    are undefined: looking them up raises ``UndefinedSymbolError``.

    Grammars are never modified after construction, so one instance can be
    shared by any number of fuzzers.
    """

    def __init__(self, expansions):
        self._expansions = {}
        for symbol, alternatives in expansions.items():
            if isinstance(alternatives, (str, Expansion)):
                raise IntegrityError(
                    "Alternatives must be a sequence of expansions, got %r"
                    % alternatives,
                    expansion=None,
                )
            converted = []
            for expansion in alternatives:
                try:
                    converted.append(self._to_expansion(expansion))
                except ScanError as err:
                    err.symbol = symbol
                    raise
            if not converted:
                raise IntegrityError("Symbol has no alternatives", expansion=None)
            self._expansions[symbol] = tuple(converted)

    @staticmethod
    def _to_expansion(expansion):
        if isinstance(expansion, Expansion):
            return expansion
        if isinstance(expansion, (tuple, list)):
            if len(expansion) != 2:
                raise IntegrityError(
                    "Expecting (expansion, opts) pair, got %r" % (expansion,)
                )
            return Expansion(expansion[0], expansion[1])
        return Expansion(expansion)

    @classmethod
    def load(cls, source):
        """Build a grammar from JSON: an object mapping each symbol to a list of
        alternatives, where an alternative is a string or a ``[string, opts]``
        pair. ``source`` can be a readable file object, ``str`` or ``bytes``.
        """
        if isinstance(source, bytes):
            source = io.StringIO(source.decode("utf-8"))
        elif not hasattr(source, "read"):
            source = io.StringIO(source)
        try:
            data = json.load(source)
        except ValueError as err:
            raise IntegrityError("Failed to load grammar: %s" % err)
        if not isinstance(data, dict):
            raise IntegrityError(
                "Expecting a JSON object at the top level, got %s"
                % type(data).__name__
            )
        return cls(data)

    def __getitem__(self, symbol):
        try:
            return self._expansions[symbol]
        except KeyError:
            raise UndefinedSymbolError("Symbol used but not defined", expansion=None)

    def __contains__(self, symbol):
        return symbol in self._expansions

    def __iter__(self):
        return iter(self._expansions)

    def __len__(self):
        return len(self._expansions)

    def __repr__(self):
        return "Grammar(%r)" % {
            symbol: list(alternatives)
            for (symbol, alternatives) in self._expansions.items()
        }

    def children(self, symbol):
        result = set()
        for expansion in self[symbol]:
            result.update(expansion.nonterminals())
        return result

    def symbol_cost(self, symbol, seen=frozenset()):
        """Cheapest cost over the alternatives of ``symbol`` to derive an all
        terminal string. Infinite if every alternative re-enters a symbol of
        ``seen``.
        """
        seen = frozenset(seen) | {symbol}
        return min(self.expansion_cost(expansion, seen) for expansion in self[symbol])

    def expansion_cost(self, expansion, seen=frozenset()):
        symbols = _nonterminals(expansion)
        if not symbols:
            return 1.0
        if any(sym in seen for sym in symbols):
            return math.inf
        return 1.0 + sum(self.symbol_cost(sym, seen) for sym in symbols)

    def reachable(self, start=DEFAULT_START):
        result = set()
        frontier = [start]
        while frontier:
            symbol = frontier.pop()
            if symbol in result:
                continue
            result.add(symbol)
            if symbol in self._expansions:
                for expansion in self._expansions[symbol]:
                    frontier.extend(expansion.nonterminals())
        return result

    def _cycles(self, undefined):
        cycles = []
        for symbol in self._expansions:
            try:
                cost = self.symbol_cost(symbol)
            except UndefinedSymbolError as err:
                LOG.debug("can't cost %s: %s", symbol, err)
                undefined.add(err.symbol)
                continue
            if math.isinf(cost):
                cycles.append(symbol)
        return cycles

    def unavoidable_cycles(self):
        return self._cycles(set())

    def analyze(self, start=DEFAULT_START):
        reachable = self.reachable(start)
        defined = set(self._expansions)
        undefined = reachable - defined
        cycles = self._cycles(undefined)
        return Analysis(reachable, defined - reachable, undefined, cycles)

    def is_valid(self, start=DEFAULT_START):
        analysis = self.analyze(start)
        if analysis.unreachable:
            LOG.warning("unreachable nonterminals: %s", sorted(analysis.unreachable))
        if analysis.undefined:
            LOG.error("undefined nonterminals: %s", sorted(analysis.undefined))
        if analysis.cycles:
            LOG.error("nonterminals in unavoidable cycles: %s", analysis.cycles)
        return not analysis.undefined and not analysis.cycles

    def validate(self, start=DEFAULT_START):
        analysis = self.analyze(start)
        if analysis.unreachable:
            LOG.warning("unreachable nonterminals: %s", sorted(analysis.unreachable))
        if analysis.undefined or analysis.cycles:
            raise InvalidGrammarError(
                analysis.undefined, analysis.cycles, analysis.unreachable
            )
        return analysis

    def recursive_symbols(self):
        """Symbols that can derive themselves, directly or through other symbols."""
        children = {
            symbol: self.children(symbol) & set(self._expansions)
            for symbol in self._expansions
        }
        result = set()
        for sym_name, sym_children in children.items():
            if sym_name in sym_children:
                LOG.debug("%s is directly recursive", sym_name)
                result.add(sym_name)
                continue
            # `issue` is a map of descendents (of any degree) to shortest ancestry
            # from this sym_name
            issue = {child_name: [] for child_name in sym_children}
            done = set()
            while issue:
                child_name = next(iter(issue))
                child_backtrace = issue.pop(child_name) + [child_name]
                done.add(child_name)
                for grandchild_name in children[child_name]:
                    if grandchild_name in done or grandchild_name in issue:
                        continue
                    if grandchild_name == sym_name:
                        result.add(sym_name)
                        LOG.debug(
                            "%s is recursive through %r (%d degree)",
                            sym_name,
                            child_backtrace,
                            len(child_backtrace),
                        )
                        issue = None
                        break
                    issue[grandchild_name] = child_backtrace
        return result
