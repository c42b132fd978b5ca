"""Service descriptor route."""

from fastapi import APIRouter

router = APIRouter()

SERVICE_NAME = "BitScope API"
ENDPOINTS = ["/blocks", "/mempool", "/tx/:id"]


@router.get("/")
async def index() -> dict:
    """Static descriptor — no cache or upstream access."""
    return {"status": "running", "service": SERVICE_NAME, "endpoints": ENDPOINTS}
