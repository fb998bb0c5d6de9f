import logging

from fastapi import FastAPI
from .config import settings
from .database import create_tables
from .errors import register_exception_handlers
from .routers import categories, transactions

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(name)s %(levelname)s %(message)s"
)

# Create FastAPI app
app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

# Create database tables on startup
@app.on_event("startup")
async def startup_event():
    create_tables()

# Include API routers
app.include_router(categories.router, prefix=f"{settings.API_V1_STR}/categories", tags=["categories"])
app.include_router(transactions.router, prefix=f"{settings.API_V1_STR}/transactions", tags=["transactions"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
