import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import get_settings
from routes import health, purge
from services.errors import PurgeError

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(title="Akamai Purge Proxy")

app.include_router(purge.router)
app.include_router(health.router)


@app.exception_handler(PurgeError)
async def purge_error_handler(request: Request, exc: PurgeError):
    logging.getLogger(__name__).debug(
        "Purge failed on %s | status=%d error=%s", request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
