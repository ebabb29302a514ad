"""CV submission and job result endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
import structlog

from tech_radar.core.config import settings
from tech_radar.core.database import get_db
from tech_radar.core.error_handling import NotFoundError, ValidationError
from tech_radar.resume.extractor import extract_pdf_text
from tech_radar.schemas.job import AnalyzeResponse, JobResponse
from tech_radar.services.job_service import JobService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


async def read_cv_upload(cv: Optional[UploadFile]) -> Optional[str]:
    """Extract text from an uploaded PDF, or None when no file was sent.

    Raises:
        ValidationError: If the upload exceeds the configured size
        ParsingError: If the upload is not a readable PDF
    """
    if cv is None or not cv.filename:
        return None

    data = await cv.read(settings.max_upload_size_bytes + 1)
    if not data:
        return None
    if len(data) > settings.max_upload_size_bytes:
        raise ValidationError(
            f"CV file exceeds {settings.max_upload_size_mb} MB limit.",
            field="cv",
            status_code=413
        )

    return await run_in_threadpool(extract_pdf_text, data, cv.filename)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_cv(
    cv: Optional[UploadFile] = File(None),
    cv_text: Optional[str] = Form(None, alias="cvText"),
    target_role: Optional[str] = Form(None, alias="targetRole"),
    db: Session = Depends(get_db)
):
    """Queue a CV for technology radar analysis.

    Text extracted from an uploaded PDF takes precedence over ``cvText``.
    The job is processed in the background; poll the result endpoint with
    the returned ``jobId``.
    """
    pdf_text = await read_cv_upload(cv)
    cv_content = pdf_text if pdf_text is not None else cv_text

    job = JobService().submit_job(db, cv_content, target_role)

    logger.info(
        "Analysis submitted via API",
        job_id=job.id,
        source="pdf" if pdf_text is not None else "text"
    )
    return AnalyzeResponse(job_id=job.id)


@router.get("/result/{job_id}", response_model=JobResponse)
async def get_result(job_id: str, db: Session = Depends(get_db)):
    """Return the job row with its status, result or error."""
    job = JobService().get_job(db, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job
