# pylint: disable=missing-docstring
################################################################################
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

import inspect

__all__ = (
    "GrammarException",
    "GenerationError",
    "IntegrityError",
    "InvalidGrammarError",
    "ScanError",
    "UndefinedSymbolError",
    "UnsupportedOperatorError",
)

_UNSET = object()


class GrammarException(Exception):
    def __init__(self, *args, **kwds):
        symbol = kwds.pop("symbol", _UNSET)
        expansion = kwds.pop("expansion", _UNSET)
        super().__init__(*args)
        frame = inspect.currentframe().f_back
        # skip over __init__ of subclasses
        while frame is not None and isinstance(
            frame.f_locals.get("self"), GrammarException
        ):
            frame = frame.f_back
        self.raise_locals = frame.f_locals if frame is not None else {}

        if symbol is _UNSET:
            symbol = self.raise_locals.get("symbol")
            if not isinstance(symbol, str):
                symbol = None
        if expansion is _UNSET:
            expansion = self.raise_locals.get("expansion")
            if expansion is not None:
                expansion = str(expansion)
        self.symbol = symbol
        self.expansion = expansion

    def __str__(self):
        # not super(): KeyError would quote the message
        msg = Exception.__str__(self)

        extra = []
        if self.symbol is not None:
            extra.append("symbol %s" % self.symbol)
        if self.expansion is not None:
            extra.append("expansion %r" % self.expansion)
        extra = "(%s)" % ", ".join(extra) if extra else None

        if msg and extra:
            return msg + " " + extra
        if extra:
            return extra
        return msg


class GenerationError(GrammarException):
    pass


class IntegrityError(GrammarException):
    pass


class ScanError(GrammarException):
    pass


class UndefinedSymbolError(GrammarException, KeyError):
    pass


class UnsupportedOperatorError(GrammarException):
    pass


class InvalidGrammarError(GrammarException):
    def __init__(self, undefined, cycles, unreachable=()):
        self.undefined = set(undefined)
        self.cycles = set(cycles)
        self.unreachable = set(unreachable)
        problems = []
        if self.undefined:
            problems.append("undefined symbols: %s" % sorted(self.undefined))
        if self.cycles:
            problems.append("symbols in unavoidable cycles: %s" % sorted(self.cycles))
        super().__init__(
            "Invalid grammar, %s" % "; ".join(problems), symbol=None, expansion=None
        )
