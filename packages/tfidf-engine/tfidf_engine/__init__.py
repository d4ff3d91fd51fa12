"""TF-IDF Engine - vector building, similarity ranking and update orchestration"""

from .models import CorpusDocument, Sibling, SparseVector
from .tokenizer import tokenize
from .vectors import VectorBuilder, inverse_document_frequency
from .similarity import cosine_similarity, compute_siblings
from .orchestrator import CorpusRecomputer, FullCorpusRecomputer, UpdateOrchestrator

__all__ = [
    "CorpusDocument",
    "Sibling",
    "SparseVector",
    "tokenize",
    "VectorBuilder",
    "inverse_document_frequency",
    "cosine_similarity",
    "compute_siblings",
    "CorpusRecomputer",
    "FullCorpusRecomputer",
    "UpdateOrchestrator",
]
