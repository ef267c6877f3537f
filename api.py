from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional
import uvicorn

from src.bootstrap import Services, build_services, select_search
from src.config import Settings
from src.domain.errors import DataAccessError
from src.domain.models import Document


# ── API Models ───────────────────────────────────────────────────────────────
class SearchRequest(BaseModel):
    query: str
    strategy: Optional[str] = None  # falls back to the configured strategy

class DocumentSchema(BaseModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    transcript: Optional[str] = None
    created_at: int  # epoch milliseconds

class SearchResponse(BaseModel):
    query: str
    strategy: str
    count: int
    results: List[DocumentSchema]

class SyncResponse(BaseModel):
    message: str
    documents_indexed: int


def _to_schema(document: Document) -> DocumentSchema:
    return DocumentSchema(
        id=document.id,
        title=document.title,
        description=document.description,
        transcript=document.transcript,
        created_at=round(document.created_at.timestamp() * 1000),
    )


# ── App Factory ──────────────────────────────────────────────────────────────
def create_app(services: Services) -> FastAPI:
    app = FastAPI(
        title="Podcast Search API",
        description="Sync podcast episodes into the index and search them.",
        version="1.0.0",
    )

    @app.get("/status")
    def get_status():
        """Number of indexed documents and the available strategies."""
        try:
            return {
                "documents_indexed": services.index_store.count(),
                "strategies": sorted(services.searches),
            }
        except DataAccessError as e:
            raise HTTPException(status_code=503, detail=str(e))

    @app.post("/sync", response_model=SyncResponse)
    def sync():
        """Run one sync pass; a no-op when the index is already in sync."""
        try:
            services.sync_service.sync()
            return SyncResponse(
                message="Sync complete.",
                documents_indexed=services.index_store.count(),
            )
        except DataAccessError as e:
            raise HTTPException(status_code=503, detail=f"Sync failed: {e}")

    @app.post("/search", response_model=SearchResponse)
    def search(request: SearchRequest):
        strategy_name = request.strategy or services.default_strategy
        try:
            strategy = select_search(services, strategy_name)
            results = strategy.find(request.query)
        except ValueError as e:
            # InvalidArgumentError (blank query) or an unknown strategy
            raise HTTPException(status_code=400, detail=str(e))
        except DataAccessError as e:
            raise HTTPException(status_code=503, detail=str(e))

        return SearchResponse(
            query=request.query,
            strategy=strategy_name,
            count=len(results),
            results=[_to_schema(d) for d in results],
        )

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(build_services(Settings.from_env())), host="0.0.0.0", port=8000)
