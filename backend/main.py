# main.py
# Standard library imports
import uuid

# Third-party imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request

# Local imports
from api import authors, courses, root
from core.init import run_all
from core.logger import request_id_ctx_var
from core.problem_details import register_exception_handlers
from core.settings import settings
from services.property_mapping_service import create_property_mapping_registry

# export environment variables
UVICORN_MODE = settings.UVICORN_MODE
FRONTEND_ORIGIN = settings.FRONTEND_ORIGIN

run_all()

app = FastAPI(title="Course Library API")

# Read-only after this point
app.state.property_mappings = create_property_mapping_registry()

# Mount routers
app.include_router(root.router, prefix="/api", tags=["Root"])
app.include_router(authors.router, prefix="/api/authors", tags=["Authors"])
app.include_router(courses.router, prefix="/api/authors/{author_id}/courses", tags=["Courses"])

register_exception_handlers(app)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request_id_ctx_var.set(request_id)
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

if UVICORN_MODE != "production":
    # Enable CORS in development mode
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Pagination", "Location"],
    )
