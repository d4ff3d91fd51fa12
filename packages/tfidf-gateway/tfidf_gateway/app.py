"""FastAPI Application for the TF-IDF Gateway"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List
import logging

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tfidf_engine import CorpusDocument, UpdateOrchestrator
from tfidf_store import SETTINGS, close_db, get_db, init_db
from tfidf_store.schemas import (
    CorpusResponse,
    DocumentResponse,
    PushDocumentRequest,
    SiblingResponse,
)

# Setup logging
logging.basicConfig(level=SETTINGS.log_level)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if SETTINGS.create_schema:
        await init_db()
    yield
    await close_db()


app = FastAPI(
    title="TF-IDF Gateway",
    version=VERSION,
    description="REST API for incremental document indexing and sibling ranking",
    lifespan=lifespan,
)


def to_response(corpus: List[CorpusDocument], message: str = "OK") -> CorpusResponse:
    """Wire view of the corpus; vectors are not serialized"""
    return CorpusResponse(
        message=message,
        documents=[
            DocumentResponse(
                id=doc.id,
                title=doc.title,
                siblings=[
                    SiblingResponse(id=sibling.document_id, similarity=sibling.similarity)
                    for sibling in doc.siblings
                ],
            )
            for doc in corpus
        ],
    )


# Endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "TF-IDF Gateway",
        "version": VERSION,
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.put("/pushDocument", response_model=CorpusResponse)
async def push_document(request: PushDocumentRequest, db: AsyncSession = Depends(get_db)):
    """
    Index a document and return every document with its ranked siblings

    A title that is already indexed is acknowledged but its content is
    ignored.
    """
    try:
        corpus = await UpdateOrchestrator(db).ingest(request.title, request.content)
    except SQLAlchemyError as e:
        logger.error(f"Corpus recomputation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document store unavailable"
        )
    return to_response(corpus)


@app.get("/documents", response_model=CorpusResponse)
async def list_documents(db: AsyncSession = Depends(get_db)):
    """Current corpus with siblings, without indexing anything"""
    try:
        corpus = await UpdateOrchestrator(db).corpus()
    except SQLAlchemyError as e:
        logger.error(f"Corpus recomputation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document store unavailable"
        )
    return to_response(corpus)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=SETTINGS.gateway_host, port=SETTINGS.gateway_port)
