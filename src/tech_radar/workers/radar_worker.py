"""Background worker that drives pending analysis jobs to a terminal state.

The worker is a single asyncio task living in the API process. Every tick it
loads all pending jobs and handles them one after another, oldest first:
claim, prompt the AI collaborator, sanitize and parse the reply, then record
``completed`` or ``failed`` together with exactly one notification. A failure
is confined to its job; neither a bad job nor a bad tick stops the loop.
Failed jobs are terminal and never retried.
"""

import asyncio
import contextlib
import json
import time
from datetime import timedelta
from typing import Any, Callable, ContextManager, Dict, Optional

from sqlalchemy.orm import Session
import structlog

from tech_radar.ai.client import TextGenerator
from tech_radar.ai.prompts import build_radar_prompt
from tech_radar.ai.sanitizer import parse_radar_response
from tech_radar.core.base import utcnow
from tech_radar.core.config import settings
from tech_radar.core.database import db_manager
from tech_radar.core.error_handling import (
    ErrorContext,
    ExternalServiceError,
    ParsingError,
    error_handler
)
from tech_radar.core.logging import performance_logger, system_logger
from tech_radar.models.job import AnalysisJob, JobStatus
from tech_radar.repositories.job import JobRepository
from tech_radar.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]

SHUTDOWN_ERROR_MESSAGE = "Analysis interrupted by worker shutdown"


class RadarWorker:
    """Fixed-interval polling worker for analysis jobs."""

    def __init__(
        self,
        generator: TextGenerator,
        session_factory: Optional[SessionFactory] = None,
        poll_interval: Optional[float] = None,
        ai_timeout: Optional[float] = None,
        artificial_delay: Optional[float] = None,
        drain_timeout: Optional[float] = None,
        retention_days: Optional[int] = None
    ):
        self.generator = generator
        self.session_factory = session_factory or db_manager.get_session
        self.poll_interval = settings.poll_interval_seconds if poll_interval is None else poll_interval
        self.ai_timeout = settings.ai_timeout_seconds if ai_timeout is None else ai_timeout
        self.artificial_delay = (
            settings.ai_artificial_delay_seconds if artificial_delay is None else artificial_delay
        )
        self.drain_timeout = (
            settings.worker_drain_timeout_seconds if drain_timeout is None else drain_timeout
        )
        self.retention_days = settings.retention_days if retention_days is None else retention_days

        self.job_repository = JobRepository()
        self.notification_service = NotificationService()

        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start the poll loop on the running event loop.

        Calling start on a running worker returns the existing task.
        """
        if self.is_running:
            logger.warning("Radar worker already running")
            return self._task

        self._stopping = False
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self.run_forever(), name="radar-worker")

        system_logger.log_system_startup(
            "radar_worker",
            poll_interval_seconds=self.poll_interval,
            ai_timeout_seconds=self.ai_timeout,
            generator=self.generator.name
        )
        return self._task

    async def stop(self) -> None:
        """Stop polling and let the in-flight job finish.

        No new job or tick starts once stop is requested. If the current job
        does not finish within the drain timeout the task is cancelled and
        that job is recorded as failed.
        """
        if self._task is None:
            return

        self._stopping = True
        if self._stop_event is not None:
            self._stop_event.set()

        if not self._task.done():
            try:
                await asyncio.wait_for(asyncio.shield(self._task), timeout=self.drain_timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Radar worker did not drain in time, cancelling",
                    drain_timeout_seconds=self.drain_timeout
                )
                self._task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._task

        self._task = None
        system_logger.log_system_shutdown("radar_worker")

    async def run_forever(self) -> None:
        """Tick, wait one interval, repeat until stopped."""
        if self._stop_event is None:
            self._stop_event = asyncio.Event()

        while not self._stopping:
            try:
                await self.tick()
            except Exception as e:
                error_handler.handle_error(
                    e, ErrorContext(operation="tick", component="radar_worker")
                )

            if self._stopping:
                break
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass

    async def tick(self) -> int:
        """Process every currently pending job once, oldest first.

        Returns:
            Number of jobs moved to a terminal state
        """
        start_time = time.monotonic()
        processed = 0
        completed = 0

        with self.session_factory() as db:
            jobs = self.job_repository.get_pending_jobs(db)
            if jobs:
                system_logger.log_queue_metrics("analysis_jobs", len(jobs))

            for index, job in enumerate(jobs):
                if self._stopping:
                    logger.info(
                        "Worker stopping, leaving jobs pending",
                        remaining=len(jobs) - index
                    )
                    break

                outcome = await self.process_job(db, job)
                if outcome is None:
                    continue
                processed += 1
                if outcome == JobStatus.COMPLETED:
                    completed += 1

            if self.retention_days:
                self.purge_expired(db)

        if processed:
            performance_logger.log_processing_metrics(
                "analysis_tick",
                items_processed=processed,
                duration_seconds=time.monotonic() - start_time,
                success_count=completed,
                error_count=processed - completed
            )
        return processed

    async def process_job(self, db: Session, job: AnalysisJob) -> Optional[JobStatus]:
        """Claim one job and drive it to completed or failed.

        Args:
            db: Database session
            job: Pending job loaded by the current tick

        Returns:
            Terminal status recorded, or None if the job was not claimed or
            was no longer processing when its outcome was stored
        """
        job_id = job.id
        target_role = job.target_role
        cv_content = job.cv_content

        try:
            claimed = self.job_repository.claim_job(db, job_id)
        except Exception as e:
            db.rollback()
            error_handler.handle_error(
                e,
                ErrorContext(operation="claim_job", component="radar_worker", job_id=job_id)
            )
            return None
        if not claimed:
            return None

        log = logger.bind(job_id=job_id)
        log.info("Processing job", target_role=target_role)

        try:
            payload = await self._analyze(job_id, cv_content, target_role)
        except asyncio.CancelledError:
            self._record_failure(db, job_id, target_role, SHUTDOWN_ERROR_MESSAGE)
            raise
        except Exception as e:
            radar_error = error_handler.handle_error(
                e,
                ErrorContext(operation="analyze_job", component="radar_worker", job_id=job_id)
            )
            return self._record_failure(db, job_id, target_role, radar_error.message)

        return self._record_success(db, job_id, target_role, payload)

    async def _analyze(self, job_id: str, cv_content: str, target_role: str) -> Dict[str, Any]:
        """Prompt the AI collaborator and parse its reply into a JSON object."""
        prompt = build_radar_prompt(
            cv_content,
            target_role,
            use_search=getattr(self.generator, "use_search_grounding", False)
        )

        if self.artificial_delay:
            await asyncio.sleep(self.artificial_delay)

        try:
            with performance_logger.log_operation_time(
                "ai_generate", job_id=job_id, generator=self.generator.name
            ):
                raw = await asyncio.wait_for(
                    self.generator.generate(prompt), timeout=self.ai_timeout
                )
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"AI request timed out after {self.ai_timeout:g} seconds",
                service_name=self.generator.name,
                original_error=e
            )

        result = parse_radar_response(raw)
        if not result.success:
            raise ParsingError(result.error_message)
        return result.payload

    def _record_success(
        self,
        db: Session,
        job_id: str,
        target_role: str,
        payload: Dict[str, Any]
    ) -> Optional[JobStatus]:
        """Store the result and its notification; never raises."""
        try:
            updated = self.job_repository.update_job_status(
                db, job_id, JobStatus.COMPLETED, result=json.dumps(payload, allow_nan=False)
            )
        except Exception as e:
            db.rollback()
            radar_error = error_handler.handle_error(
                e,
                ErrorContext(operation="store_result", component="radar_worker", job_id=job_id)
            )
            return self._record_failure(db, job_id, target_role, radar_error.message)

        if not updated:
            logger.warning("Job missing or no longer processing, result not stored", job_id=job_id)
            return None

        try:
            self.notification_service.notify_job_finished(
                db, job_id, target_role, JobStatus.COMPLETED
            )
        except Exception as e:
            # The job stays completed; only the inbox entry is lost
            db.rollback()
            error_handler.handle_error(
                e,
                ErrorContext(operation="notify_completed", component="radar_worker", job_id=job_id)
            )

        logger.info("Job completed successfully", job_id=job_id)
        return JobStatus.COMPLETED

    def _record_failure(
        self,
        db: Session,
        job_id: str,
        target_role: str,
        error_message: str
    ) -> Optional[JobStatus]:
        """Store the failure and its notification; never raises."""
        try:
            updated = self.job_repository.update_job_status(
                db, job_id, JobStatus.FAILED, error=error_message
            )
        except Exception as e:
            db.rollback()
            error_handler.handle_error(
                e,
                ErrorContext(operation="store_failure", component="radar_worker", job_id=job_id)
            )
            return None

        if not updated:
            logger.warning("Job missing or no longer processing, failure not stored", job_id=job_id)
            return None

        try:
            self.notification_service.notify_job_finished(
                db, job_id, target_role, JobStatus.FAILED
            )
        except Exception as e:
            db.rollback()
            error_handler.handle_error(
                e,
                ErrorContext(operation="notify_failed", component="radar_worker", job_id=job_id)
            )

        logger.info("Job failed", job_id=job_id, error=error_message)
        return JobStatus.FAILED

    def purge_expired(self, db: Session) -> int:
        """Delete finished jobs and notifications past the retention window.

        Returns:
            Number of jobs deleted
        """
        cutoff = utcnow() - timedelta(days=self.retention_days)
        job_ids = self.job_repository.get_finished_before(db, cutoff)
        self.notification_service.repository.purge_before(db, cutoff, job_ids)
        return self.job_repository.delete_jobs(db, job_ids)
