from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes.waffle import router as waffle_router

load_dotenv()
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="waffleviz API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(waffle_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
