"""
Skein Server — FastAPI wrapper around the knot routes.

    python -m skein.server
"""

from fastapi import FastAPI

from skein import config
from skein.api.knot_routes import router as knot_router

app = FastAPI(title="Skein", docs_url="/docs", redoc_url=None)
app.include_router(knot_router)


@app.get("/api/health")
def health():
    """Fast health check, no DB access."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    config.setup_logging()
    port = config.api_port()
    print(f"Skein API: http://127.0.0.1:{port}")
    uvicorn.run(app, host="127.0.0.1", port=port, log_level="info")
