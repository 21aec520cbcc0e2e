import logging
import os

from fastapi import FastAPI

from tictactoe.api.routes import router

# Configure logging
logging.basicConfig(level=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="tictactoe", version="0.1.0")
app.include_router(router)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "tictactoe", "version": "0.1.0"}
