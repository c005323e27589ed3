from contextlib import asynccontextmanager
import logging
import time
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

from spacenews.pipeline import SpaceNewsRunner, create_runner
from spacenews.scheduler import BackgroundSchedule

logger = logging.getLogger("spacenews.api")

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# ---- Runner (settings + store client) is built once, before serving ----
@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.runner is None:
        app.state.runner = create_runner()
    runner = app.state.runner
    background = None
    if runner.settings.api_scheduler:
        background = BackgroundSchedule(runner, runner.settings.fetch_interval_hours).start()
    try:
        yield
    finally:
        if background is not None:
            background.stop()

def get_runner(request: Request) -> SpaceNewsRunner:
    return request.app.state.runner

def create_app(runner: Optional[SpaceNewsRunner] = None) -> FastAPI:
    app = FastAPI(title="Space News Fetch API", version="1.0.0", lifespan=lifespan)
    app.state.runner = runner

    @app.get("/health")
    def health(runner: SpaceNewsRunner = Depends(get_runner)):
        return {
            "status": "ok",
            "database": runner.store.db.name,
            "collection": runner.store.collection,
            "documents": {name: len(docs) for name, docs in runner.store.list_documents().items()},
        }

    # Accepts any method and ignores the body; callers only learn success/failure
    @app.api_route("/fetch-news", methods=ANY_METHOD, response_class=PlainTextResponse)
    def fetch_news(runner: SpaceNewsRunner = Depends(get_runner)):
        t0 = time.time()
        try:
            runner.run()
        except Exception:
            logger.exception("Error fetching space news (on demand)")
            return PlainTextResponse("Error fetching space news.", status_code=500)
        logger.info(f"On-demand fetch finished in {round((time.time() - t0) * 1000, 2)}ms")
        return PlainTextResponse("Space news fetched and stored.", status_code=200)

    @app.get("/snapshot")
    def latest_snapshot(runner: SpaceNewsRunner = Depends(get_runner)):
        doc = runner.store.read_snapshot()
        if doc is None:
            raise HTTPException(status_code=404, detail="no snapshot stored")
        return doc

    return app

app = create_app()
