"""
Classic MapReduce word count example.
Counts the frequency of each word across all input files.
"""

import re

# Maximal runs of letters; digits, punctuation and underscores separate words
WORD_RE = re.compile(r'[^\W\d_]+')


def map_function(name, content):
    """
    Map function: emit (word, "1") for each word in the file.

    Args:
        name: Input file name (unused)
        content: Full text of the file

    Returns:
        List of (word, "1") tuples
    """
    return [(word, "1") for word in WORD_RE.findall(content)]


def reduce_function(key, values):
    """
    Reduce function: number of occurrences of the word.

    Args:
        key: Word
        values: One "1" per occurrence

    Returns:
        Occurrence count as a string
    """
    return str(len(values))
