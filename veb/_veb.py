import logging
import sys

from pyrsistent import pmap

from ._errors import InvalidUniverse, OutOfRange, UniverseTooLarge

logger = logging.getLogger(__name__)

_INDEX_LIMIT = sys.maxsize

_SPLIT_CACHE = {}


def _split(u):
    """Returns (cluster universe, summary universe) for a power of two u

    The cluster universe is 2^floor(log2(u) / 2), taken from the bit length,
    so cluster universe * summary universe == u for every level. When log2(u)
    is even both halves are equal (16 -> 4 clusters of 4); when it is odd the
    summary is twice as wide as a cluster (8 -> 4 clusters of 2).
    """
    if u in _SPLIT_CACHE:
        return _SPLIT_CACHE[u]
    sqrt_u = 1 << ((u.bit_length() - 1) >> 1)
    _SPLIT_CACHE[u] = s = sqrt_u, u // sqrt_u
    return s


class VEBTree:
    class _Node:
        def __init__(self, x, u):
            self.min = self.max = x
            self.u = u

            if u > 2:
                self.sqrt_u, self.summary_u = _split(u)
                self.cluster = pmap()
                self.summary = None

        def copy(self):
            new = VEBTree._Node(self.min, self.u)
            new.max = self.max

            if new.u > 2:
                new.cluster = self.cluster
                new.summary = self.summary

            return new

        def high(self, x):
            return x // self.sqrt_u

        def low(self, x):
            return x % self.sqrt_u

        def index(self, i, j):
            return i * self.sqrt_u + j

    def __init__(self, universe):
        """Constructor for van-emde-boas tree

        Arguments:
            universe {int} -- [
                size of the key range, the tree stores integers from [0, universe).
                Internally padded up to the next power of two
            ]

        Raises:
            InvalidUniverse -- [if universe <= 1]
            UniverseTooLarge -- [if universe > sys.maxsize]
        """
        if not isinstance(universe, int):
            raise TypeError(f"universe must be an int, got {universe!r}")
        if universe <= 1:
            raise InvalidUniverse(universe)
        if universe > _INDEX_LIMIT:
            raise UniverseTooLarge(universe, _INDEX_LIMIT)

        self._universe = universe
        self._capacity = 1 << (universe - 1).bit_length()

        self._root = None
        self._len = 0

        logger.debug(
            "created vEB tree, universe=%d capacity=%d", universe, self._capacity
        )

    @property
    def universe(self):
        return self._universe

    @property
    def capacity(self):
        return self._capacity

    def __len__(self):
        return self._len

    def __iter__(self):
        return self.iter_elements()

    def __reversed__(self):
        return self.iter_elements(reverse=True)

    def __repr__(self):
        return "vEB(universe={}, {{{}}})".format(
            self._universe, ", ".join(map(str, self))
        )

    def __contains__(self, x):
        return self.has(x)

    def __eq__(self, other):
        if not isinstance(other, VEBTree):
            return NotImplemented
        return (
            self._universe == other._universe
            and self._len == other._len
            and self.elements() == other.elements()
        )

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    @staticmethod
    def _is_key(x):
        # bool is an int subclass, but True is not a key
        return isinstance(x, int) and not isinstance(x, bool)

    @staticmethod
    def _check_int(x):
        if not VEBTree._is_key(x):
            raise TypeError(f"Key: {x!r} is not an int")

    def _check_x(self, x):
        VEBTree._check_int(x)
        if not 0 <= x < self._universe:
            raise OutOfRange(x, self._universe)

    @staticmethod
    def _insert(V, x, u):
        if V is None:
            return VEBTree._Node(x, u)
        if x == V.min or x == V.max:
            return V
        V = V.copy()
        if x < V.min:
            x, V.min = V.min, x
        if x > V.max:
            V.max = x
        if u > 2:
            c, i = V.high(x), V.low(x)
            cluster = V.cluster.get(c)
            if cluster is None:
                V.summary = VEBTree._insert(V.summary, c, V.summary_u)
            V.cluster = V.cluster.set(c, VEBTree._insert(cluster, i, V.sqrt_u))
        return V

    @staticmethod
    def _delete(V, x, u):
        # x must be present in V; returns None once V holds nothing
        if V.min == V.max:
            return None
        V = V.copy()
        if u == 2:
            V.min = V.max = 1 - x
            return V

        if x == V.min:
            # the cached minimum lives in no cluster, so promote the next one
            c = V.summary.min
            x = V.min = V.index(c, V.cluster[c].min)

        c, i = V.high(x), V.low(x)
        cluster = VEBTree._delete(V.cluster[c], i, V.sqrt_u)
        if cluster is None:
            V.cluster = V.cluster.remove(c)
            V.summary = VEBTree._delete(V.summary, c, V.summary_u)
        else:
            V.cluster = V.cluster.set(c, cluster)

        if V.summary is None:
            V.max = V.min
        elif x == V.max:
            c = V.summary.max
            V.max = V.index(c, V.cluster[c].max)
        return V

    @staticmethod
    def _has(V, x, u):
        if V is None:
            return False
        if x == V.min or x == V.max:
            return True
        if u == 2:
            return False
        return VEBTree._has(V.cluster.get(V.high(x)), V.low(x), V.sqrt_u)

    @staticmethod
    def _successor(V, x, u):
        if V is None:
            return None
        if x < V.min:
            return V.min
        if u == 2:
            return 1 if x == 0 and V.max == 1 else None

        c, i = V.high(x), V.low(x)
        cluster = V.cluster.get(c)
        if cluster is not None and i < cluster.max:
            return V.index(c, VEBTree._successor(cluster, i, V.sqrt_u))

        c = VEBTree._successor(V.summary, c, V.summary_u)
        if c is None:
            return None
        return V.index(c, V.cluster[c].min)

    @staticmethod
    def _predecessor(V, x, u):
        if V is None:
            return None
        if x > V.max:
            return V.max
        if u == 2:
            return 0 if x == 1 and V.min == 0 else None

        c, i = V.high(x), V.low(x)
        cluster = V.cluster.get(c)
        if cluster is not None and i > cluster.min:
            return V.index(c, VEBTree._predecessor(cluster, i, V.sqrt_u))

        c = VEBTree._predecessor(V.summary, c, V.summary_u)
        if c is None:
            return V.min if x > V.min else None
        return V.index(c, V.cluster[c].max)

    def insert(self, x):
        self._check_x(x)
        if x not in self:
            self._root = VEBTree._insert(self._root, x, self._capacity)
            self._len += 1

    def delete(self, x):
        self._check_x(x)
        if x in self:
            self._root = VEBTree._delete(self._root, x, self._capacity)
            self._len -= 1

    def update(self, values):
        for x in values:
            self.insert(x)

    def clear(self):
        logger.debug("clearing vEB tree of %d elements", self._len)
        self._root = None
        self._len = 0

    def has(self, x):
        """Membership test, False for anything that is not an int in [0, universe)"""
        if not VEBTree._is_key(x) or not 0 <= x < self._universe:
            return False
        return VEBTree._has(self._root, x, self._capacity)

    def find_next(self, x):
        """Returns the smallest element strictly greater than x, None if there is none"""
        VEBTree._check_int(x)
        if x < 0:
            return self.minimum()
        if x >= self._universe - 1:
            return None
        return VEBTree._successor(self._root, x, self._capacity)

    def find_prev(self, x):
        """Returns the largest element strictly smaller than x, None if there is none"""
        VEBTree._check_int(x)
        if x >= self._universe:
            return self.maximum()
        if x <= 0:
            return None
        return VEBTree._predecessor(self._root, x, self._capacity)

    def minimum(self):
        return self._root.min if self._root else None

    def maximum(self):
        return self._root.max if self._root else None

    def pop_min(self):
        if self._root is None:
            raise KeyError("pop_min(): tree is empty")
        x = self._root.min
        self._root = VEBTree._delete(self._root, x, self._capacity)
        self._len -= 1
        return x

    def pop_max(self):
        if self._root is None:
            raise KeyError("pop_max(): tree is empty")
        x = self._root.max
        self._root = VEBTree._delete(self._root, x, self._capacity)
        self._len -= 1
        return x

    def copy(self):
        """Returns an independent tree holding the same elements

        Nodes are never modified once reachable from a root (every update
        path-copies), so the copy shares the node graph without sharing
        any mutable state.
        """
        new = VEBTree(self._universe)
        new._root = self._root
        new._len = self._len
        return new

    def iter_elements(self, reverse=False):
        if self._root:
            f = self.find_prev if reverse else self.find_next
            x = self.maximum() if reverse else self.minimum()

            while x is not None:
                yield x
                x = f(x)

    def elements(self, reverse=False):
        return list(self.iter_elements(reverse=reverse))
