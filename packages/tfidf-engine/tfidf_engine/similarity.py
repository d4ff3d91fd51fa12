"""Cosine similarity and sibling ranking"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from .models import CorpusDocument, Sibling, SparseVector

logger = logging.getLogger(__name__)


def cosine_similarity(a: SparseVector, b: SparseVector) -> float:
    """
    Cosine of the angle between two vectors

    Exactly 0.0 when either vector has a zero norm, so a zero vector is
    not similar to anything, itself included. Capped at 1.0.
    """
    denom = a.norm() * b.norm()
    if denom == 0:
        return 0.0
    return min(1.0, a.dot(b) / denom)


def compute_siblings(documents: Sequence[CorpusDocument]) -> Sequence[CorpusDocument]:
    """
    Attach ranked siblings to every document

    Similarity is symmetric, so only the lower triangle (j < i) is
    evaluated: n*(n-1)/2 pairs. Each positive score is appended to both
    documents' builders with the same value. The builders are merged
    into ``siblings`` once all pairs are done, sorted by descending
    similarity. Ties keep insertion order.
    """
    builders: Dict[int, List[Sibling]] = defaultdict(list)

    for i, doc in enumerate(documents):
        for j in range(i):
            other = documents[j]
            similarity = cosine_similarity(doc.vector, other.vector)
            logger.debug(
                f"compute similarity <{i},{j}> <{doc.title},{other.title}> = {similarity}"
            )
            if similarity > 0:
                builders[doc.id].append(Sibling(other.id, similarity))
                builders[other.id].append(Sibling(doc.id, similarity))

    titles = {doc.id: doc.title for doc in documents}
    for doc in documents:
        doc.siblings = sorted(builders.get(doc.id, []), key=lambda s: s.similarity, reverse=True)
        if not doc.siblings:
            logger.info(f'"{doc.title}" sibling: none')
        for sibling in doc.siblings:
            logger.info(
                f'"{doc.title}" sibling: "{titles[sibling.document_id]}" '
                f"similarity: {sibling.similarity}"
            )

    return documents
