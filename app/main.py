from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from app.api.v1 import (
    auth,
    user,
    project_router,
    task_router,
)

from app.core.config import settings
from app.core.database import engine, Base
from app.core.exceptions import AccessError
import logging
import time
from fastapi.middleware.cors import CORSMiddleware


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Tracker API", version="1.0.0", debug=settings.debug)

# Include routers
app.include_router(auth.router, prefix="/api/v1/auth", tags=["authentication"])
app.include_router(user.router, prefix="/api/v1/user", tags=["user"])
app.include_router(project_router.router, prefix="/api/v1/projects", tags=["project"])
app.include_router(task_router.router, prefix="/api/v1/tasks", tags=["task"])

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_url or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AccessError)
async def access_error_handler(request: Request, exc: AccessError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
async def startup_event():
    # Wait for database to be ready and create tables
    max_retries = 30
    retry_count = 0

    while retry_count < max_retries:
        try:
            # Try to create tables
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created successfully")
            break
        except Exception as e:
            retry_count += 1
            logger.warning(
                f"Database connection attempt {retry_count} failed: {str(e)}"
            )
            if retry_count >= max_retries:
                logger.error("Max retries reached. Could not connect to database.")
                raise e
            time.sleep(2)


@app.get("/")
def read_root():
    return {"message": "Task Tracker API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    try:
        # Check database connection
        from sqlalchemy import text

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Database unhealthy: {str(e)}")
