from ._errors import InvalidUniverse, OutOfRange, UniverseTooLarge, VEBError
from ._veb import VEBTree

__all__ = [
    "InvalidUniverse",
    "OutOfRange",
    "UniverseTooLarge",
    "VEBError",
    "VEBTree",
    "veb",
]


def veb(universe, values=()):
    """This module returns a van-emde-boas tree

    Arguments:
        universe {int} -- [the tree stores integers from [0, universe)]

    Keyword Arguments:
        values {iterable} -- [integers to insert right away] (default: {()})
    """
    tree = VEBTree(universe)
    tree.update(values)
    return tree
