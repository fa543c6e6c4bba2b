# pylint: disable=missing-docstring
################################################################################
#
# Description: Derivation tree
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

from .error import GenerationError
from .scanner import Nonterminal, scan

__all__ = ("Node",)


class Node(object):
    """A node of a derivation tree.

    A node is in one of three states:

    * terminal: literal ``text``, never expanded.
    * unexpanded: a nonterminal ``symbol`` still waiting for an alternative to be
      chosen (``children`` is None).
    * expanded: a nonterminal ``symbol`` that was rewritten once, ``children``
      holds the subtrees for the tokens of the chosen alternative.

    Expanding a node changes it in place, so a reference to a node deep in the
    tree stays valid while other parts of the tree are expanded.

    ``str(node)`` renders the subtree: the concatenation of all terminal text,
    with any still unexpanded symbol rendered as itself.
    """

    __slots__ = ("value", "children", "terminal")

    def __init__(self, value, children=None, terminal=False):
        if terminal and children is not None:
            raise GenerationError("Terminal node %r can't have children" % value)
        self.value = value
        self.children = list(children) if children is not None else None
        self.terminal = terminal

    @classmethod
    def unexpanded(cls, symbol):
        return cls(symbol)

    @classmethod
    def new_terminal(cls, text):
        return cls(text, terminal=True)

    @classmethod
    def from_expansion(cls, expansion):
        """Child nodes for the tokens of an alternative. The empty alternative
        gives a single empty terminal."""
        tokens = scan(expansion)
        if not tokens:
            return [cls.new_terminal("")]
        return [
            cls.unexpanded(token.symbol)
            if isinstance(token, Nonterminal)
            else cls.new_terminal(token.text)
            for token in tokens
        ]

    @property
    def symbol(self):
        return None if self.terminal else self.value

    @property
    def text(self):
        return self.value if self.terminal else None

    @property
    def is_terminal(self):
        return self.terminal

    @property
    def is_unexpanded(self):
        return not self.terminal and self.children is None

    @property
    def is_expanded(self):
        return self.children is not None

    def expand(self, children):
        if self.terminal:
            raise GenerationError("Can't expand terminal node %r" % self.value)
        if self.children is not None:
            raise GenerationError("Node %s is already expanded" % self.value)
        self.children = list(children)

    def walk(self):
        """Pre-order iteration over the nodes of the subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def unexpanded_nodes(self):
        return [node for node in self.walk() if node.is_unexpanded]

    def any_possible_expansions(self):
        return any(node.is_unexpanded for node in self.walk())

    def count_possible_expansions(self):
        return sum(1 for node in self.walk() if node.is_unexpanded)

    def __str__(self):
        return "".join(node.value for node in self.walk() if not node.is_expanded)

    def __repr__(self):
        if self.terminal:
            return "Node.new_terminal(%r)" % self.value
        if self.children is None:
            return "Node.unexpanded(%r)" % self.value
        return "Node(%r, %r)" % (self.value, self.children)
