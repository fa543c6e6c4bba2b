#!/usr/bin/env python
################################################################################
#
# Description: Grammar linter
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

import argparse
import logging
import sys

from .cli import SafeFileType, load_grammar, setup_logging
from .grammar import DEFAULT_START

LOG = logging.getLogger("linter")


def lint(grammar, start=DEFAULT_START):
    """Log everything worth knowing about ``grammar`` and return whether it is
    valid for ``start``."""
    analysis = grammar.analyze(start)
    for symbol in sorted(analysis.unreachable):
        LOG.warning("%s is unreachable from %s", symbol, start)
    for symbol in sorted(analysis.undefined):
        LOG.error("%s is used but not defined", symbol)
    for symbol in analysis.cycles:
        LOG.error("%s has no paths to termination (unavoidable cycle)", symbol)
    for symbol in sorted(grammar.recursive_symbols()):
        LOG.info("%s is recursive", symbol)
    return not analysis.undefined and not analysis.cycles


def main(argv=None):

    setup_logging()

    argp = argparse.ArgumentParser(description="Check a grammar for problems")
    argp.add_argument(
        "input", type=SafeFileType("r"), help="Input grammar definition (JSON)"
    )
    argp.add_argument(
        "-s",
        "--start",
        default=DEFAULT_START,
        help="Start symbol (default: %(default)s)",
    )
    argp.add_argument(
        "--no-ebnf",
        dest="ebnf",
        action="store_false",
        help="Grammar is plain BNF, don't convert EBNF operators",
    )
    args = argp.parse_args(argv)
    with args.input:
        grammar = load_grammar(args.input, args.ebnf)
    return 0 if lint(grammar, args.start) else 1


if __name__ == "__main__":
    sys.exit(main())
