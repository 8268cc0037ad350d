from fastapi import APIRouter, Request, Response
from starlette.concurrency import run_in_threadpool

from gatehouse.web.deps import AppDep

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def dispatch(request: Request, app: AppDep) -> Response:
    """Catch-all entry point; every request goes through the dispatcher."""
    body = await request.body()
    # Dispatch runs on a worker thread so requests are handled in parallel
    return await run_in_threadpool(app.dispatch, request, body)
