# pylint: disable=missing-docstring
################################################################################
#
# Description: EBNF to BNF conversion
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
"""Rewrite EBNF operators into plain context-free productions.

Supported operators are postfix ``?`` (optional), ``*`` (zero or more) and ``+``
(one or more), applied to a nonterminal or to a parenthesized group::

    "<list>":   ["[(<value>, )*<value>]"]

becomes::

    "<list>":     ["[<symbol-1><value>]"]
    "<symbol>":   ["<value>, "]
    "<symbol-1>": ["", "<symbol><symbol-1>"]

Groups are lifted into their own symbol first, then every ``<symbol>op`` is
replaced by a new symbol implementing the repetition. Symbols are visited in
sorted order, so converting the same grammar twice gives the same names.
"""

import logging

from .error import UnsupportedOperatorError
from .grammar import Expansion, Grammar
from .scanner import next_operator_nonterminal, next_parenthesized_group

__all__ = (
    "SymbolAllocator",
    "convert_grammar",
    "convert_operators",
    "convert_parentheses",
    "normalize",
)


LOG = logging.getLogger("ebnffuzzer")

DEFAULT_BASE = "<symbol>"


class SymbolAllocator(object):
    """Hands out nonterminal names that are not used anywhere in a grammar.

    The reserved set starts with every symbol defined or referenced in the
    grammar. ``fresh("<name>")`` returns ``<name>`` if it is free, otherwise the
    first free one of ``<name-1>``, ``<name-2>``, ... and reserves it.
    """

    def __init__(self, grammar=None):
        self.existing = set()
        if grammar is not None:
            for symbol in grammar:
                self.existing.add(symbol)
                self.existing.update(grammar.children(symbol))

    def fresh(self, base=DEFAULT_BASE):
        name = base[1:-1] if base.startswith("<") and base.endswith(">") else base
        symbol = "<%s>" % name
        count = 0
        while symbol in self.existing:
            count += 1
            symbol = "<%s-%d>" % (name, count)
        self.existing.add(symbol)
        LOG.debug("allocated new symbol %s", symbol)
        return symbol


def convert_parentheses(expansion, allocator):
    """Lift each ``(content)op`` into a new symbol, leaving ``<new>op`` behind."""
    text = expansion.string
    new_expansions = {}
    while True:
        group = next_parenthesized_group(text)
        if group is None:
            break
        symbol = allocator.fresh()
        text = "".join(
            (text[: group.start], symbol, group.operator, text[group.end :])
        )
        new_expansions[symbol] = [Expansion(group.content)]
        LOG.debug("replaced %s with %s%s", group.match, symbol, group.operator)
    return Expansion(text, expansion.opts), new_expansions


def _operator_expansions(operator, original, symbol):
    if operator == "?":
        alternatives = ["", original]
    elif operator == "*":
        alternatives = ["", original + symbol]
    elif operator == "+":
        alternatives = [original, original + symbol]
    else:
        raise UnsupportedOperatorError("Unsupported EBNF operator: %s" % operator)
    return [Expansion(alternative) for alternative in alternatives]


def convert_operators(expansion, allocator):
    """Replace each ``<symbol>op`` with a new symbol implementing ``op``."""
    text = expansion.string
    new_expansions = {}
    while True:
        found = next_operator_nonterminal(text)
        if found is None:
            break
        symbol = allocator.fresh()
        try:
            new_expansions[symbol] = _operator_expansions(
                found.operator, found.symbol, symbol
            )
        except UnsupportedOperatorError as err:
            err.expansion = expansion.string
            raise
        text = "".join((text[: found.start], symbol, text[found.end :]))
        LOG.debug("replaced %s with %s", found.match, symbol)
    return Expansion(text, expansion.opts), new_expansions


def convert_grammar(grammar, convert):
    """Apply ``convert`` to every alternative of ``grammar`` and return the
    resulting grammar, including the productions ``convert`` introduced.
    """
    allocator = SymbolAllocator(grammar)
    result = {symbol: [] for symbol in grammar}
    introduced = {}
    for symbol in sorted(grammar):
        for expansion in grammar[symbol]:
            try:
                converted, new_expansions = convert(expansion, allocator)
            except UnsupportedOperatorError as err:
                err.symbol = symbol
                raise
            result[symbol].append(converted)
            introduced.update(new_expansions)
    result.update(introduced)
    return Grammar(result)


def normalize(grammar):
    """Convert an EBNF grammar to an equivalent plain grammar."""
    grammar = convert_grammar(grammar, convert_parentheses)
    grammar = convert_grammar(grammar, convert_operators)
    LOG.debug("normalized grammar has %d symbols", len(grammar))
    return grammar
