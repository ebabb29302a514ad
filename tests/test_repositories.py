"""Tests for job and notification repositories against SQLite."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from tech_radar.core.base import utcnow
from tech_radar.core.error_handling import DatabaseError
from tech_radar.models.job import AnalysisJob, JobStatus


def _new_job(job_repository, db, created_at=None, role="Data Analyst"):
    return job_repository.create_job(
        db,
        job_id=str(uuid4()),
        cv_content="Python, SQL",
        target_role=role,
        created_at=created_at
    )


class TestJobRepository:
    """Job store operations."""

    def test_create_job_is_pending(self, job_repository, db_session, store):
        job = _new_job(job_repository, db_session)

        stored = store.get_job(job.id)
        assert stored.status == JobStatus.PENDING.value
        assert stored.cv_content == "Python, SQL"
        assert stored.target_role == "Data Analyst"
        assert stored.result is None
        assert stored.error is None
        assert stored.created_at == stored.updated_at

    def test_duplicate_id_raises_database_error(self, job_repository, db_session, store):
        job_repository.create_job(db_session, "job-1", "cv", "role")

        with store.session() as other:
            with pytest.raises(DatabaseError):
                job_repository.create_job(other, "job-1", "other cv", "other role")

        assert store.get_job("job-1").cv_content == "cv"

    def test_get_job_missing_returns_none(self, job_repository, db_session):
        assert job_repository.get_job(db_session, "does-not-exist") is None

    def test_pending_jobs_oldest_first(self, job_repository, db_session):
        base = datetime(2025, 1, 1, 12, 0, 0)
        newer = _new_job(job_repository, db_session, created_at=base + timedelta(seconds=2))
        older = _new_job(job_repository, db_session, created_at=base)
        middle = _new_job(job_repository, db_session, created_at=base + timedelta(seconds=1))

        pending = job_repository.get_pending_jobs(db_session)

        assert [job.id for job in pending] == [older.id, middle.id, newer.id]

    def test_pending_jobs_exclude_other_statuses(self, job_repository, db_session):
        pending = _new_job(job_repository, db_session)
        claimed = _new_job(job_repository, db_session)
        finished = _new_job(job_repository, db_session)
        job_repository.claim_job(db_session, claimed.id)
        job_repository.claim_job(db_session, finished.id)
        job_repository.update_job_status(db_session, finished.id, JobStatus.FAILED, error="x")

        ids = [job.id for job in job_repository.get_pending_jobs(db_session)]

        assert ids == [pending.id]

    def test_update_job_status_sets_fields(self, job_repository, db_session, store):
        job = _new_job(job_repository, db_session)
        job_repository.claim_job(db_session, job.id)

        updated = job_repository.update_job_status(
            db_session, job.id, JobStatus.COMPLETED, result='{"a": 1}'
        )

        stored = store.get_job(job.id)
        assert updated is True
        assert stored.status == "completed"
        assert stored.result == '{"a": 1}'
        assert stored.error is None
        assert stored.updated_at >= stored.created_at

    def test_update_missing_job_returns_false(self, job_repository, db_session):
        assert job_repository.update_job_status(
            db_session, "missing", JobStatus.FAILED, error="boom"
        ) is False

    def test_pending_job_cannot_skip_processing(self, job_repository, db_session, store):
        job = _new_job(job_repository, db_session)

        assert job_repository.update_job_status(
            db_session, job.id, JobStatus.COMPLETED, result="{}"
        ) is False

        stored = store.get_job(job.id)
        assert stored.status == JobStatus.PENDING.value
        assert stored.result is None

    @pytest.mark.parametrize("finished", [JobStatus.COMPLETED, JobStatus.FAILED])
    @pytest.mark.parametrize("target", list(JobStatus))
    def test_finished_job_is_never_overwritten(
        self, job_repository, db_session, store, finished, target
    ):
        job = _new_job(job_repository, db_session)
        job_repository.claim_job(db_session, job.id)
        job_repository.update_job_status(db_session, job.id, finished, result="{}", error="x")

        assert job_repository.update_job_status(
            db_session, job.id, target, result='{"late": true}', error="late"
        ) is False
        assert job_repository.claim_job(db_session, job.id) is False

        stored = store.get_job(job.id)
        assert stored.status == finished.value
        assert stored.result == "{}"
        assert stored.error == "x"

    def test_processing_job_cannot_return_to_pending(self, job_repository, db_session, store):
        job = _new_job(job_repository, db_session)
        job_repository.claim_job(db_session, job.id)

        assert job_repository.update_job_status(db_session, job.id, JobStatus.PENDING) is False
        assert store.get_job(job.id).status == JobStatus.PROCESSING.value

    def test_claim_job_only_once(self, job_repository, db_session, store):
        job = _new_job(job_repository, db_session)

        assert job_repository.claim_job(db_session, job.id) is True
        assert job_repository.claim_job(db_session, job.id) is False
        assert store.get_job(job.id).status == JobStatus.PROCESSING.value

    def test_claim_missing_job(self, job_repository, db_session):
        assert job_repository.claim_job(db_session, "missing") is False

    def test_count_by_status(self, job_repository, db_session):
        _new_job(job_repository, db_session)
        _new_job(job_repository, db_session)
        done = _new_job(job_repository, db_session)
        job_repository.claim_job(db_session, done.id)
        job_repository.update_job_status(db_session, done.id, JobStatus.COMPLETED, result="{}")

        assert job_repository.count_by_status(db_session, JobStatus.PENDING) == 2
        assert job_repository.count_by_status(db_session, JobStatus.COMPLETED) == 1
        assert job_repository.count_by_status(db_session, JobStatus.FAILED) == 0

    def test_finished_before_and_delete(self, job_repository, db_session):
        old = _new_job(job_repository, db_session)
        recent = _new_job(job_repository, db_session)
        pending = _new_job(job_repository, db_session)
        for job in (old, recent):
            job_repository.claim_job(db_session, job.id)
            job_repository.update_job_status(db_session, job.id, JobStatus.COMPLETED, result="{}")
        db_session.query(AnalysisJob).filter(AnalysisJob.id.in_([old.id, pending.id])).update(
            {AnalysisJob.updated_at: utcnow() - timedelta(days=30)},
            synchronize_session=False
        )
        db_session.commit()

        expired = job_repository.get_finished_before(db_session, utcnow() - timedelta(days=7))

        assert expired == [old.id]
        assert job_repository.delete_jobs(db_session, expired) == 1
        assert job_repository.delete_jobs(db_session, []) == 0
        assert job_repository.get_job(db_session, recent.id) is not None


class TestNotificationRepository:
    """Notification inbox operations."""

    def test_create_notification_is_unread(
        self, job_repository, notification_repository, db_session
    ):
        job = _new_job(job_repository, db_session)

        notification = notification_repository.create_notification(
            db_session, "n-1", job.id, "Your analysis for Data Analyst is complete!"
        )

        assert notification.is_read is False
        assert notification.job_id == job.id
        assert notification.created_at is not None

    def test_unread_most_recent_first(
        self, job_repository, notification_repository, db_session
    ):
        job = _new_job(job_repository, db_session)
        base = datetime(2025, 1, 1, 12, 0, 0)
        for index in range(3):
            notification_repository.create(
                db_session,
                id=f"n-{index}",
                job_id=job.id,
                message=f"message {index}",
                created_at=base + timedelta(minutes=index)
            )

        unread = notification_repository.get_unread_notifications(db_session)

        assert [n.id for n in unread] == ["n-2", "n-1", "n-0"]

    def test_mark_read_clears_inbox(
        self, job_repository, notification_repository, db_session
    ):
        job = _new_job(job_repository, db_session)
        notification_repository.create_notification(db_session, "n-1", job.id, "one")
        notification_repository.create_notification(db_session, "n-2", job.id, "two")

        assert notification_repository.mark_notifications_read(db_session) == 2
        db_session.expire_all()
        assert notification_repository.get_unread_notifications(db_session) == []
        assert notification_repository.mark_notifications_read(db_session) == 0

    def test_get_for_job(self, job_repository, notification_repository, db_session):
        first = _new_job(job_repository, db_session)
        second = _new_job(job_repository, db_session)
        notification_repository.create_notification(db_session, "n-1", first.id, "one")
        notification_repository.create_notification(db_session, "n-2", second.id, "two")

        assert [n.id for n in notification_repository.get_for_job(db_session, first.id)] == ["n-1"]

    def test_purge_before_removes_old_and_listed_jobs(
        self, job_repository, notification_repository, db_session, store
    ):
        old_job = _new_job(job_repository, db_session)
        purged_job = _new_job(job_repository, db_session)
        kept_job = _new_job(job_repository, db_session)
        notification_repository.create(
            db_session, id="old", job_id=old_job.id, message="old",
            created_at=utcnow() - timedelta(days=30)
        )
        notification_repository.create_notification(db_session, "purged", purged_job.id, "purged")
        notification_repository.create_notification(db_session, "kept", kept_job.id, "kept")

        deleted = notification_repository.purge_before(
            db_session, utcnow() - timedelta(days=7), [purged_job.id]
        )

        assert deleted == 2
        assert [n.id for n in store.all_notifications()] == ["kept"]
