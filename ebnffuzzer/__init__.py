# pylint: disable=missing-docstring
################################################################################
#
# Description: Grammar based generation/fuzzer with pluggable expansion strategies
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

from .ebnf import SymbolAllocator, normalize
from .error import (
    GenerationError,
    GrammarException,
    IntegrityError,
    InvalidGrammarError,
    ScanError,
    UndefinedSymbolError,
    UnsupportedOperatorError,
)
from .fuzzer import GrammarFuzzer, default_strategies
from .grammar import DEFAULT_START, Analysis, Expansion, Grammar
from .scanner import Nonterminal, Terminal, scan
from .strategy import (
    CloseStrategy,
    GrowthStrategy,
    RandomStrategy,
    Strategy,
    WeightedStrategy,
)
from .tree import Node

__all__ = (
    "Analysis",
    "CloseStrategy",
    "DEFAULT_START",
    "Expansion",
    "GenerationError",
    "Grammar",
    "GrammarException",
    "GrammarFuzzer",
    "GrowthStrategy",
    "IntegrityError",
    "InvalidGrammarError",
    "Node",
    "Nonterminal",
    "RandomStrategy",
    "ScanError",
    "Strategy",
    "SymbolAllocator",
    "Terminal",
    "UndefinedSymbolError",
    "UnsupportedOperatorError",
    "WeightedStrategy",
    "default_strategies",
    "normalize",
    "scan",
)
