# -*- coding: utf-8 -*-
import itertools
import operator

first = operator.itemgetter(0)

def windows(iterable, length):
    args = itertools.tee(iterable, length)
    # advance each iterator as many steps as its rank-1
    for i in range(len(args)-1, 0, -1):
        for iter_ in args[i:]:
            next(iter_, None)
    return zip(*args)


def kmer_set(iterable, kmer_lengths=(2,)):
    ret = set()
    for k in kmer_lengths:
        ret.update(windows(iterable, k))
    return ret


def distance(a_str, b_str, kmer_lengths=(2,)):
    a_chunks = kmer_set(a_str, kmer_lengths)
    b_chunks = kmer_set(b_str, kmer_lengths)
    return len(a_chunks.symmetric_difference(b_chunks))


def closest_names(needle_str, haystack, max_distance=None, kmer_lengths=(2,)):
    """Return the names in ``haystack`` nearest to ``needle_str``, ties
    included, in haystack order. Names farther than ``max_distance``
    are never returned.

    :param needle_str: The misspelled name
    :param haystack: The known names
    :type haystack: iterable of str

    """
    distances = [ (distance(needle_str, s, kmer_lengths), s)
                  for s in haystack ]
    if max_distance is not None:
        distances = [ d for d in distances if first(d) <= max_distance ]
    if not distances:
        return []
    best = min(map(first, distances))
    return [ s for d, s in distances if d == best ]
