"""
Inverted index MapReduce example.
Maps each word to the input files it appears in.
"""

import re

WORD_RE = re.compile(r'[^\W\d_]+')


def map_function(name, content):
    """
    Map function: emit (word, name) once per distinct word in the file.

    Args:
        name: Input file name (used as document ID)
        content: Full text of the file

    Yields:
        (word, name) tuples
    """
    for word in sorted(set(WORD_RE.findall(content))):
        yield (word, name)


def reduce_function(key, values):
    """
    Reduce function: count and list the documents containing a word.

    Args:
        key: Word
        values: Document names, in any order

    Returns:
        "<count> <doc>,<doc>,..." with documents sorted
    """
    unique_docs = sorted(set(values))
    return f"{len(unique_docs)} {','.join(unique_docs)}"
