import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .config import Settings, get_settings
from .errors import IngestionError, NoDataError
from .langfuse_tracer import LangfuseTracer, trace_ingest
from .models import ColumnConfig, FilterSummary, SessionStatus, ToggleRequest
from .session import FilterSession

router = APIRouter()


def get_session(request: Request) -> FilterSession:
    return request.app.state.session


def get_tracer(request: Request) -> LangfuseTracer:
    return request.app.state.tracer


def no_data(exc: NoDataError) -> HTTPException:
    return HTTPException(status_code=404, detail=exc.message)


def content_disposition(file_name: str) -> str:
    """
    Attachment header for a download name.

    Names that are not plain ASCII get an RFC 6266 filename* parameter with an
    ASCII filename fallback.
    """
    encoded = quote(file_name, safe="")
    if encoded == file_name:
        return f'attachment; filename="{file_name}"'
    fallback = file_name.encode("ascii", "ignore").decode("ascii")
    fallback = "".join(c for c in fallback if c.isprintable() and c not in '"\\')
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{encoded}"


@router.get("/")
def read_root():
    return {"message": "ExpenseFilter API"}


@router.get("/config", response_model=ColumnConfig)
def read_config(request: Request):
    """Column names the upload must contain, and the currency used for totals"""
    settings: Settings = request.app.state.settings
    return ColumnConfig(
        category_column=settings.category_column,
        amount_column=settings.amount_column,
        locale=settings.locale,
        currency=settings.currency,
    )


@router.post("/upload", response_model=FilterSummary)
async def upload_file(
    file: UploadFile = File(...),
    session: FilterSession = Depends(get_session),
    tracer: LangfuseTracer = Depends(get_tracer),
):
    """Upload, parse and validate a CSV file"""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    contents = await file.read()
    try:
        summary = session.upload(contents, file.filename)
    except IngestionError as exc:
        trace_ingest(tracer, file.filename, len(contents), exc.message)
        raise HTTPException(status_code=400, detail=exc.message)

    trace_ingest(tracer, file.filename, len(contents), "ok", rows=summary.total_data)
    return summary


@router.get("/data", response_model=FilterSummary)
def get_data(session: FilterSession = Depends(get_session)):
    """Get the current rows, categories and totals"""
    try:
        return session.view()
    except NoDataError as exc:
        raise no_data(exc)


@router.post("/filter/toggle", response_model=FilterSummary)
def toggle_filter(request: ToggleRequest, session: FilterSession = Depends(get_session)):
    """Select or deselect a category"""
    try:
        return session.toggle(request.category)
    except NoDataError as exc:
        raise no_data(exc)


@router.post("/filter/reset", response_model=FilterSummary)
def reset_filter(session: FilterSession = Depends(get_session)):
    """Clear the category filter"""
    try:
        return session.reset()
    except NoDataError as exc:
        raise no_data(exc)


@router.get("/export")
def export_filtered(session: FilterSession = Depends(get_session)):
    """Download the filtered rows as CSV"""
    try:
        text, file_name = session.export()
    except NoDataError as exc:
        raise no_data(exc)
    return Response(
        content=text,
        media_type="text/csv",
        headers={"Content-Disposition": content_disposition(file_name)},
    )


@router.get("/status", response_model=SessionStatus)
def get_status(session: FilterSession = Depends(get_session)):
    """Get the current file name and last upload error"""
    return session.status()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with a fresh, empty session."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="ExpenseFilter API")
    app.state.settings = settings
    app.state.session = FilterSession(settings)
    app.state.tracer = LangfuseTracer(settings)

    # CORS middleware for the frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()


def serve():
    """Run the API with uvicorn (the `expense-filter` console script)."""
    import uvicorn

    uvicorn.run("expense_filter.main:app", host="127.0.0.1", port=8000)
