# Copyright (C) 2018 DataStorm
#
# This file is part of NDRTree.
#
# NDRTree is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# NDRTree is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Partial sorting.

Bulk loading only needs items to be split into ordered groups, not to be
fully sorted. :func:`select` is the Floyd-Rivest selection algorithm and
:func:`multi_select` uses it in a divide and conquer fashion to order groups
between each other while leaving each group unordered, in average linear
time.

Ranges are inclusive on both ends. Comparison functions take two items and
return a signed number, e.g. ``toolz.partial(accessor.compare_min, axis)``.
'''
import math


# Above this range size, select first narrows the range around k with a
# sample estimate.
SELECT_THRESHOLD = 600


def select(items, left, right, k, compare):
    """
    Floyd-Rivest selection.

    Rearranges ``items[left:right + 1]`` in place so that the item of rank `k`
    ends up at index `k`, smaller or equal items before it and greater or
    equal items after it.

    Args:
        items (list): items, mutated.
        left (int): first index of the range.
        right (int): last index of the range.
        k (int): rank to select, within the range.
        compare (callable): signed comparison of two items.
    """
    while right > left:
        if right - left > SELECT_THRESHOLD:
            n = right - left + 1
            i = k - left + 1
            z = math.log(n)
            s = 0.5 * math.exp(2 * z / 3)
            sd = 0.5 * math.sqrt(z * s * (n - s) / n)
            if i - n / 2 < 0:
                sd = -sd
            new_left = max(left, int(math.floor(k - i * s / n + sd)))
            new_right = min(right, int(math.floor(k + (n - i) * s / n + sd)))
            select(items, new_left, new_right, k, compare)

        pivot = items[k]
        i = left
        j = right

        _swap(items, left, k)
        if compare(items[right], pivot) > 0:
            _swap(items, left, right)

        while i < j:
            _swap(items, i, j)
            i += 1
            j -= 1
            while compare(items[i], pivot) < 0:
                i += 1
            while compare(items[j], pivot) > 0:
                j -= 1

        if compare(items[left], pivot) == 0:
            _swap(items, left, j)
        else:
            j += 1
            _swap(items, j, right)

        if j <= k:
            left = j + 1
        if k <= j:
            right = j - 1


def _swap(items, i, j):
    items[i], items[j] = items[j], items[i]


def group_ranges(left, right, n):
    """
    Splits the inclusive range into ``ceil(size / n)`` consecutive groups.

    All groups have size `n` but the last one.

    Returns:
        list of 2-tuples: inclusive (first, last) index of each group.
    """
    size = right - left + 1
    if size <= 0:
        return []
    starts = list(range(left, right + 1, n))
    ends = [s - 1 for s in starts[1:]] + [right]
    return list(zip(starts, ends))


def multi_select(items, left, right, n, compare):
    """
    Orders ``items[left:right + 1]`` into groups of `n` items.

    After the call, every item of a group compares lower or equal to every
    item of the following groups. Items within a group are left unordered.
    Groups are the ones given by :func:`group_ranges`.

    Args:
        items (list): items, mutated.
        left (int): first index of the range.
        right (int): last index of the range.
        n (int): group size.
        compare (callable): signed comparison of two items.
    """
    bounds = [first for first, _ in group_ranges(left, right, n)[1:]]
    partition(items, left, right, bounds, compare)


def partition(items, left, right, bounds, compare):
    """
    Orders ``items[left:right + 1]`` around the given group starts.

    Same as :func:`multi_select`, with groups of arbitrary sizes: `bounds`
    holds the first index of every group but the first one, in increasing
    order.
    """
    # Each entry: a range and the slice of bounds falling into it.
    stack = [(left, right, 0, len(bounds))]
    while stack:
        left, right, lo, hi = stack.pop()
        if lo >= hi:
            continue
        mid = (lo + hi) // 2
        k = bounds[mid]
        select(items, left, right, k, compare)
        stack.append((left, k - 1, lo, mid))
        stack.append((k + 1, right, mid + 1, hi))
