#!/usr/bin/env python
# pylint: disable=missing-docstring
################################################################################
#
# Description: Grammar based generation/fuzzer
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
import io
import logging
import os
import random
import sys
import time

from .ebnf import normalize
from .fuzzer import GrammarFuzzer
from .grammar import DEFAULT_START, Grammar
from .strategy import CloseStrategy, GrowthStrategy, RandomStrategy

__all__ = ("JSON_GRAMMAR", "main")


LOG = logging.getLogger("ebnffuzzer")


JSON_GRAMMAR = {
    "<start>": ["<assoc>"],
    "<value>": ["<assoc>", "<list>", "<bool>", "<string>", "<int>"],
    "<assoc>": ["{(<string>: <value>, )*<string>: <value>}"],
    "<list>": ["[(<value>, )*<value>]"],
    "<bool>": ["true", "false"],
    "<string>": ['"<char>+"'],
    "<char>": ["a", "b", "c", "d"],
    "<int>": ["<digit>+"],
    "<digit>": ["0", "1", "2", "3", "4", "5", "6", "7", "8", "9"],
}

DEFAULT_GROWTH = (0, 1000)
DEFAULT_RANDOM = (40, 8000)


def setup_logging():
    logging.basicConfig(level=logging.INFO)
    if bool(os.getenv("DEBUG")):
        logging.getLogger().setLevel(logging.DEBUG)
        LOG.setLevel(logging.DEBUG)


class SafeFileType(argparse.FileType):
    def __call__(self, string):
        if string == "-":
            return argparse.FileType.__call__(self, string)
        if "w" in self._mode and os.path.isfile(string):
            raise argparse.ArgumentTypeError(
                "output file exists, not overwriting: %s" % string
            )
        try:
            return io.open(string, mode=self._mode, encoding="utf-8")
        except IOError as exc:
            raise argparse.ArgumentTypeError("can't open '%s': %s" % (string, exc))


def load_grammar(fd, ebnf=True):
    grammar = Grammar(JSON_GRAMMAR) if fd is None else Grammar.load(fd)
    if ebnf:
        grammar = normalize(grammar)
    return grammar


def main(argv=None):

    setup_logging()

    argp = argparse.ArgumentParser(
        description="Generate testcases from a (E)BNF grammar"
    )
    argp.add_argument(
        "input",
        type=SafeFileType("r"),
        nargs="?",
        help="Input grammar definition (JSON, default: built-in JSON grammar)",
    )
    argp.add_argument(
        "output",
        type=SafeFileType("w"),
        nargs="?",
        default=sys.stdout,
        help="Output testcase",
    )
    argp.add_argument(
        "-s",
        "--start",
        default=DEFAULT_START,
        help="Start symbol (default: %(default)s)",
    )
    argp.add_argument(
        "-n", "--count", type=int, default=1, help="Number of testcases to generate"
    )
    argp.add_argument("--seed", type=int, help="Seed for the random source")
    argp.add_argument(
        "--growth",
        type=int,
        nargs=2,
        metavar=("THRESHOLD", "STEPS"),
        default=DEFAULT_GROWTH,
        help="Nonterminal threshold and step limit of the growth phase",
    )
    argp.add_argument(
        "--random",
        type=int,
        nargs=2,
        metavar=("THRESHOLD", "STEPS"),
        default=DEFAULT_RANDOM,
        help="Nonterminal threshold and step limit of the random phase",
    )
    argp.add_argument(
        "--no-ebnf",
        dest="ebnf",
        action="store_false",
        help="Grammar is plain BNF, don't convert EBNF operators",
    )
    argp.add_argument(
        "--stats",
        action="store_true",
        help="Log testcase sizes and generation times",
    )
    args = argp.parse_args(argv)

    try:
        grammar = load_grammar(args.input, args.ebnf)
    finally:
        if args.input not in (None, sys.stdin):
            args.input.close()
    grammar.validate(args.start)

    rng = random.Random(args.seed)
    strategies = [
        GrowthStrategy(args.growth[0], args.growth[1], rng=rng),
        RandomStrategy(args.random[0], args.random[1], rng=rng),
        CloseStrategy(rng=rng),
    ]
    fuzzer = GrammarFuzzer(grammar, strategies, rng=rng)

    stats = []
    for _ in range(args.count):
        start = time.perf_counter()
        testcase = fuzzer.fuzz(args.start)
        elapsed = (time.perf_counter() - start) * 1000
        stats.append((len(testcase), elapsed))
        args.output.write(testcase)
        args.output.write("\n")
    if args.output is not sys.stdout:
        args.output.close()
    if args.stats:
        for length, elapsed in sorted(stats):
            LOG.info("%d characters in %.1f ms", length, elapsed)


if __name__ == "__main__":
    main()
