import logging

from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse, Response

from core.config import settings, setup_logging
from core.errors import WorkerError
from services.webhook_service import handle_trigger_request

# Setup logging
setup_logging()

app = FastAPI(
    title="AutoRepo Worker",
    version=settings.WORKER_VERSION,
    description="Turns signed GitHub webhooks into AutoRepo build triggers."
)

logger = logging.getLogger("autorepo_worker")

async def get_raw_body(request: Request):
    return await request.body()

def add_cors_headers(response: Response, request: Request) -> Response:
    origin = request.headers.get("Origin")
    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
    response.headers.append("Vary", "Origin")
    return response

@app.on_event("startup")
async def startup_event():
    logger.info(f"AutoRepo Worker {settings.WORKER_VERSION} starting...")
    logger.info(f"Log level set to: {settings.LOG_LEVEL}")


@app.exception_handler(WorkerError)
async def worker_error_handler(request: Request, exc: WorkerError):
    logger.warning(f"Request to {request.url.path} rejected: {exc}")
    return add_cors_headers(JSONResponse(status_code=exc.status_code, content=exc.to_dict()), request)


@app.get("/health", tags=["General"])
async def health_check():
    """Health check endpoint."""
    return {"status": "alive"}


@app.api_route("/{path:path}", methods=["GET", "POST"], tags=["GitHub"])
async def github_trigger(request: Request, raw_body: bytes = Depends(get_raw_body)):
    """Endpoint receiving GitHub webhooks on `/trigger/<repo>[/<repo>...]`."""
    trigger = await handle_trigger_request(
        headers=request.headers,
        url=str(request.url),
        path=request.url.path,
        query_params=dict(request.query_params),
        raw_body=raw_body,
    )
    logger.info(f"Trigger accepted: {trigger.to_dict()}")
    return add_cors_headers(JSONResponse(content=trigger.to_dict()), request)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
