"""Regex tokenizer: punctuation becomes whitespace, tokens are lower-cased"""
import re
from typing import Iterator

SEPARATORS = re.compile(r"[”“’•—…|@$/#°\-:&*+=\[\]?!(){},'\">_<;%\\.]")


def tokenize(content: str) -> Iterator[str]:
    """
    Split text into lowercase tokens

    >>> list(tokenize("The cat, the HAT!"))
    ['the', 'cat', 'the', 'hat']
    """
    for token in SEPARATORS.sub(" ", content or "").split():
        yield token.lower()
