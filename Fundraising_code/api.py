# api.py
"""
Cron trigger for the scrape pass.

POST /api/cron with "Authorization: Bearer <CRON_SECRET>" runs one pass.
"""
import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pipeline import run_scrape_pass

logger = logging.getLogger(__name__)

app = FastAPI(title="Fundraising Sync", version="0.1.0")


def _authorized(request: Request) -> bool:
    secret = os.getenv("CRON_SECRET")
    if not secret:
        return False
    return request.headers.get("authorization") == f"Bearer {secret}"


@app.get("/health")
def health():
    return {"ok": True}


@app.api_route("/api/cron", methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"])
def cron(request: Request):
    if request.method != "POST":
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})

    if not _authorized(request):
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        result = run_scrape_pass()
    except Exception as e:
        logger.error("Cron job error: %s", e, exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})

    if not result.ok:
        return JSONResponse(
            status_code=500,
            content={"error": result.fatal_error, "result": result.model_dump()},
        )
    return {"success": True, "result": result.model_dump()}
