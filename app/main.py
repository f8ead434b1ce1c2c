from fastapi import FastAPI

# Routers
from app.api.routers.history import router as history_router


app = FastAPI(title="Wiki History Crawler", version="0.1")

app.include_router(history_router)
