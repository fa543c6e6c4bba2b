# pylint: disable=missing-docstring
################################################################################
#
# Description: Derivation tree expansion
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

import logging

from .error import GenerationError
from .grammar import DEFAULT_START
from .randutil import get_rng, random_element
from .strategy import CloseStrategy, GrowthStrategy, RandomStrategy
from .tree import Node

__all__ = ("GrammarFuzzer", "default_strategies")


LOG = logging.getLogger("ebnffuzzer")


def default_strategies(rng=None):
    """Grow the tree, add random variety, then close it."""
    rng = get_rng(rng)
    return [
        GrowthStrategy(0, 1000, rng=rng),
        RandomStrategy(40, 8000, rng=rng),
        CloseStrategy(rng=rng),
    ]


class GrammarFuzzer(object):
    """Generate random strings from a grammar by expanding derivation trees.

    ::

        grammar = normalize(Grammar({...}))
        grammar.validate("<start>")
        fuzzer = GrammarFuzzer(grammar, default_strategies())
        root = Node.unexpanded("<start>")
        fuzzer.expand_tree(root)
        print(str(root))

    Each call to ``expand_once`` expands exactly one unexpanded node, picked at
    random by walking down from the root through subtrees that still have
    something to expand. ``expand_tree`` runs each strategy in turn on the same
    tree, each picking up where the previous one stopped.

    ``rng`` is the random source used to pick nodes (the strategies have their
    own), pass eg. ``random.Random(seed)`` for reproducible trees.
    """

    def __init__(self, grammar, strategies=None, rng=None):
        self.grammar = grammar
        self.rng = get_rng(rng)
        self.strategies = (
            list(strategies)
            if strategies is not None
            else default_strategies(self.rng)
        )

    def expand_nonterminal(self, node, strategy):
        symbol = node.symbol
        expansion = strategy.choose(self.grammar, symbol)
        if expansion is None:
            raise GenerationError("%r chose no alternative" % strategy)
        LOG.debug("%s -> %r", symbol, expansion)
        return Node.from_expansion(expansion)

    def expand_once(self, node, strategy):
        while node.is_expanded:
            node = random_element(
                self.rng, node.children, lambda child: child.any_possible_expansions()
            )
            if node is None:
                return
        if node.is_terminal:
            return
        node.expand(self.expand_nonterminal(node, strategy))

    def expand_with_strategy(self, root, strategy):
        steps = 0
        while root.any_possible_expansions() and strategy.cont(root, steps):
            self.expand_once(root, strategy)
            steps += 1
        LOG.debug(
            "%r stopped after %d steps (%d nonterminals left)",
            strategy,
            steps,
            root.count_possible_expansions(),
        )
        return steps

    def expand_tree(self, root, strategies=None):
        for strategy in self.strategies if strategies is None else strategies:
            self.expand_with_strategy(root, strategy)
        return root

    def fuzz(self, start=DEFAULT_START):
        root = Node.unexpanded(start)
        self.expand_tree(root)
        return str(root)
