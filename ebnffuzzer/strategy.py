# pylint: disable=missing-docstring
################################################################################
#
# Description: Expansion strategies
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
"""Expansion strategies decide how long to keep expanding a derivation tree and
which alternative to use for each nonterminal.

Strategies are usually chained, eg. ``GrowthStrategy`` to grow the tree,
``RandomStrategy`` for variety, then ``CloseStrategy`` to finish it off using the
cheapest alternatives. ``CloseStrategy`` only terminates on a valid grammar (see
``Grammar.is_valid``).
"""

import logging
import numbers

from .error import IntegrityError
from .randutil import get_rng, max_index, min_index

__all__ = (
    "CloseStrategy",
    "GrowthStrategy",
    "RandomStrategy",
    "Strategy",
    "WeightedStrategy",
)


LOG = logging.getLogger("ebnffuzzer")


class Strategy(object):
    """Base class for expansion strategies.

    Subclasses implement ``cont(root, steps)`` (keep expanding ``root`` after
    ``steps`` expansions under this strategy?) and ``choose(grammar, symbol)``
    (the alternative text to use for ``symbol``).
    """

    def __init__(self, rng=None):
        self.rng = get_rng(rng)

    def cont(self, root, steps):
        raise NotImplementedError()

    def choose(self, grammar, symbol):
        raise NotImplementedError()

    @staticmethod
    def costs(grammar, symbol):
        seen = frozenset((symbol,))
        return [
            grammar.expansion_cost(expansion, seen) for expansion in grammar[symbol]
        ]


class _BoundedStrategy(Strategy):
    def __init__(self, nonterminal_threshold, max_steps, rng=None):
        Strategy.__init__(self, rng)
        self.nonterminal_threshold = nonterminal_threshold
        self.max_steps = max_steps

    def cont(self, root, steps):
        return (
            root.count_possible_expansions() < self.nonterminal_threshold
            and steps < self.max_steps
        )

    def __repr__(self):
        return "%s(%r, %r)" % (
            type(self).__name__,
            self.nonterminal_threshold,
            self.max_steps,
        )


class RandomStrategy(_BoundedStrategy):
    """Pick alternatives uniformly at random while the tree has fewer than
    ``nonterminal_threshold`` unexpanded nodes, for at most ``max_steps`` steps.
    """

    def choose(self, grammar, symbol):
        alternatives = grammar[symbol]
        return alternatives[self.rng.randrange(len(alternatives))].string


class GrowthStrategy(_BoundedStrategy):
    """Like ``RandomStrategy``, but always pick the most expensive alternative
    (ties broken at random). This favours recursive alternatives and makes the
    tree grow.
    """

    def choose(self, grammar, symbol):
        idx = max_index(self.rng, self.costs(grammar, symbol))
        return grammar[symbol][idx].string


class CloseStrategy(Strategy):
    """Always continue, picking the cheapest alternative (ties broken at random)
    until nothing is left to expand.
    """

    def cont(self, root, steps):
        return True

    def choose(self, grammar, symbol):
        idx = min_index(self.rng, self.costs(grammar, symbol))
        return grammar[symbol][idx].string

    def __repr__(self):
        return "CloseStrategy()"


class WeightedStrategy(_BoundedStrategy):
    """Like ``RandomStrategy``, but each alternative is picked with probability
    weight/sum(weights). The weight of an alternative is its annotation, which
    must be a non-negative number (1.0 if there is none).
    """

    def choose(self, grammar, symbol):
        alternatives = grammar[symbol]
        weights = []
        for expansion in alternatives:
            weight = 1.0 if expansion.opts is None else expansion.opts
            if (
                not isinstance(weight, numbers.Real)
                or isinstance(weight, bool)
                or weight < 0
            ):
                raise IntegrityError(
                    "Invalid weight for alternative: %r (expecting a number >= 0)"
                    % (weight,)
                )
            weights.append(float(weight))
        total = sum(weights)
        if total <= 0.0:
            raise IntegrityError("Invalid total weight for symbol: %r" % total)
        target = self.rng.uniform(0, total)
        LOG.debug("%s: looking for target %.2f from total %.2f", symbol, target, total)
        chosen = None
        for expansion, weight in zip(alternatives, weights):
            if weight > 0.0:
                chosen = expansion
            target -= weight
            if target < 0.0:
                return expansion.string
        # uniform() can return total itself
        return chosen.string
