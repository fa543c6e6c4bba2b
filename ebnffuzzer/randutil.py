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

import random

__all__ = ("get_rng", "max_index", "min_index", "random_element")


def get_rng(rng=None):
    """Return ``rng``, or the ``random`` module itself when it is None. Anything
    with ``choice``, ``randrange`` and ``uniform`` will do (eg. ``random.Random(1)``
    for reproducible runs).
    """
    if rng is None:
        return random
    if isinstance(rng, int) and not isinstance(rng, bool):
        return random.Random(rng)
    return rng


def random_element(rng, values, predicate=None):
    """Uniformly random element of ``values`` satisfying ``predicate``, or None if
    there is none."""
    if predicate is not None:
        values = [value for value in values if predicate(value)]
    if not values:
        return None
    return values[rng.randrange(len(values))]


def _extreme_index(rng, values, extreme):
    if not values:
        raise ValueError("no values to choose from")
    target = extreme(values)
    return random_element(
        rng, [i for (i, value) in enumerate(values) if value == target]
    )


def min_index(rng, values):
    """Index of a minimal value, ties broken uniformly at random."""
    return _extreme_index(rng, values, min)


def max_index(rng, values):
    """Index of a maximal value, ties broken uniformly at random."""
    return _extreme_index(rng, values, max)
