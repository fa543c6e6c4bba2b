# pylint: disable=missing-docstring
################################################################################
#
# Description: Expansion string tokenizer
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
"""Split expansion strings into tokens and find EBNF constructs in them.

An expansion string is literal text interleaved with nonterminal references
written as ``<name>``. ``name`` may not contain ``<``, ``>`` or a space, and the
literal text may not contain ``<`` or ``>`` at all::

    "<string>: <json>"  ->  [Nonterminal("<string>"), Terminal(": "),
                             Nonterminal("<json>")]

EBNF operators (``?``, ``*`` and ``+``) are postfix and apply either to a single
nonterminal (``<char>+``) or to a parenthesized group (``(<value>, )*``). Groups
are found innermost first: in ``((<a>)*)+`` the first match is ``(<a>)*``, and
the enclosing group only matches once the caller has rewritten the inner one.
"""

import collections
import logging
import re

from .error import ScanError

__all__ = (
    "GroupMatch",
    "Nonterminal",
    "OperatorMatch",
    "Terminal",
    "next_operator_nonterminal",
    "next_parenthesized_group",
    "nonterminals",
    "scan",
)


LOG = logging.getLogger("ebnffuzzer")


Terminal = collections.namedtuple("Terminal", "text")
Nonterminal = collections.namedtuple("Nonterminal", "symbol")

GroupMatch = collections.namedtuple(
    "GroupMatch", "match operator content start end"
)
OperatorMatch = collections.namedtuple(
    "OperatorMatch", "match operator symbol start end"
)


_RE_TOKEN = re.compile(
    r"""(?P<nonterminal><[^<>\ ]+>)
       |(?P<terminal>[^<>]+)""",
    re.VERBOSE,
)
_RE_GROUP = re.compile(r"\((?P<content>[^()]+)\)(?P<op>[*+?]+)")
_RE_OPERATOR = re.compile(r"(?P<symbol><[^<>\ ]+>)(?P<op>[*+?]+)", re.VERBOSE)


def scan(expansion):
    """Return the ordered list of ``Terminal`` and ``Nonterminal`` tokens of an
    expansion string. The whole string must be consumed, otherwise ``ScanError``
    is raised. The empty string scans to an empty list (epsilon).
    """
    expansion = str(expansion)
    tokens = []
    pos = 0
    while pos < len(expansion):
        match = _RE_TOKEN.match(expansion, pos)
        if match is None:
            raise ScanError("Failed to scan expansion at: %s" % expansion[pos:])
        if match.group("nonterminal") is not None:
            tokens.append(Nonterminal(match.group("nonterminal")))
        else:
            tokens.append(Terminal(match.group("terminal")))
        pos = match.end(0)
    return tokens


def nonterminals(expansion):
    return [
        token.symbol for token in scan(expansion) if isinstance(token, Nonterminal)
    ]


def next_parenthesized_group(text):
    match = _RE_GROUP.search(text)
    if match is None:
        return None
    LOG.debug("found group %s in %r", match.group(0), text)
    return GroupMatch(
        match.group(0),
        match.group("op"),
        match.group("content"),
        match.start(0),
        match.end(0),
    )


def next_operator_nonterminal(text):
    match = _RE_OPERATOR.search(text)
    if match is None:
        return None
    LOG.debug("found operator %s in %r", match.group(0), text)
    return OperatorMatch(
        match.group(0),
        match.group("op"),
        match.group("symbol"),
        match.start(0),
        match.end(0),
    )
