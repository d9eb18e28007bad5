"""Firestore job store for BrickQuote.

Provides CRUD operations for saved jobs and company profiles.
"""

from typing import Dict, Any, Optional, List
import inspect
import secrets
import time
import structlog

from firebase_admin import firestore

from brickquote.config.errors import ErrorCode, StorageError
from brickquote.models.job import SavedJob
from brickquote.models.profile import QuoteProfile

logger = structlog.get_logger()


def generate_job_id() -> str:
    """Millisecond timestamp plus a random suffix, e.g. '1718000000000-k3j9x2a'."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)[:7]}"


class JobStore:
    """Service for Firestore operations on jobs.

    Jobs are stored verbatim (inputs, estimate and pricing inputs) under
    /jobs/{jobId}; profiles under /profiles/{userId}.

    Note: Firebase Admin SDK for Python is synchronous. Methods are
    marked async for interface compatibility but operations are sync.
    """

    COLLECTION_JOBS = "jobs"
    COLLECTION_PROFILES = "profiles"

    def __init__(self, db=None):
        """Initialize JobStore.

        Args:
            db: Optional Firestore client. If not provided, uses default.
        """
        self._db = db

    @property
    def db(self):
        """Get Firestore client (lazy initialization)."""
        if self._db is None:
            self._db = firestore.client()
        return self._db

    async def _maybe_await(self, result: Any) -> Any:
        """Await result if it is awaitable (supports AsyncMock in unit tests)."""
        if inspect.isawaitable(result):
            return await result
        return result

    async def save_job(self, job: SavedJob) -> str:
        """Create or replace a saved job.

        Args:
            job: The job record.

        Returns:
            The job ID.

        Raises:
            StorageError: If Firestore operation fails.
        """
        try:
            doc_ref = self.db.collection(self.COLLECTION_JOBS).document(job.id)
            await self._maybe_await(doc_ref.set(job.to_dict()))
            logger.info("job_saved", job_id=job.id, user_id=job.user_id)
            return job.id

        except Exception as e:
            logger.error("firestore_save_failed", job_id=job.id, error=str(e))
            raise StorageError(
                message=f"Failed to save job: {str(e)}",
                job_id=job.id
            )

    async def get_job(self, job_id: str) -> Optional[SavedJob]:
        """Fetch a saved job by ID.

        Args:
            job_id: The job document ID.

        Returns:
            SavedJob or None if not found.

        Raises:
            StorageError: If Firestore operation fails.
        """
        try:
            doc_ref = self.db.collection(self.COLLECTION_JOBS).document(job_id)
            doc = await self._maybe_await(doc_ref.get())

            if not doc.exists:
                return None
            return SavedJob.model_validate({**doc.to_dict(), "id": doc.id})

        except Exception as e:
            logger.error("firestore_get_failed", job_id=job_id, error=str(e))
            raise StorageError(
                message=f"Failed to get job: {str(e)}",
                job_id=job_id
            )

    async def require_job(self, job_id: str) -> SavedJob:
        """Fetch a saved job, failing if it does not exist.

        Raises:
            StorageError: JOB_NOT_FOUND if missing.
        """
        job = await self.get_job(job_id)
        if job is None:
            raise StorageError(
                message=f"Job not found: {job_id}",
                code=ErrorCode.JOB_NOT_FOUND,
                job_id=job_id
            )
        return job

    async def list_jobs(self, user_id: str, limit: int = 50) -> List[SavedJob]:
        """List a user's jobs, newest first.

        Args:
            user_id: Owner user ID.
            limit: Maximum number of jobs to return.

        Returns:
            List of SavedJob.

        Raises:
            StorageError: If Firestore operation fails.
        """
        try:
            query = (
                self.db.collection(self.COLLECTION_JOBS)
                .where("userId", "==", user_id)
                .order_by("createdAt", direction=firestore.Query.DESCENDING)
                .limit(limit)
            )
            docs = await self._maybe_await(query.get())
            jobs = [SavedJob.model_validate({**doc.to_dict(), "id": doc.id}) for doc in docs]
            logger.info("jobs_listed", user_id=user_id, count=len(jobs))
            return jobs

        except Exception as e:
            logger.error("firestore_list_failed", user_id=user_id, error=str(e))
            raise StorageError(
                message=f"Failed to list jobs: {str(e)}",
                details={"user_id": user_id}
            )

    async def delete_job(self, job_id: str) -> None:
        """Delete a saved job.

        Raises:
            StorageError: If Firestore operation fails.
        """
        try:
            doc_ref = self.db.collection(self.COLLECTION_JOBS).document(job_id)
            await self._maybe_await(doc_ref.delete())
            logger.info("job_deleted", job_id=job_id)

        except Exception as e:
            logger.error("firestore_delete_failed", job_id=job_id, error=str(e))
            raise StorageError(
                message=f"Failed to delete job: {str(e)}",
                job_id=job_id
            )

    async def get_profile(self, user_id: str) -> QuoteProfile:
        """Fetch a user's profile; defaults when none has been saved.

        Raises:
            StorageError: If Firestore operation fails.
        """
        try:
            doc_ref = self.db.collection(self.COLLECTION_PROFILES).document(user_id)
            doc = await self._maybe_await(doc_ref.get())

            if not doc.exists:
                return QuoteProfile()
            return QuoteProfile.model_validate(doc.to_dict())

        except Exception as e:
            logger.error("firestore_profile_get_failed", user_id=user_id, error=str(e))
            raise StorageError(
                message=f"Failed to get profile: {str(e)}",
                details={"user_id": user_id}
            )

    async def save_profile(self, user_id: str, profile: QuoteProfile) -> None:
        """Create or replace a user's profile.

        Raises:
            StorageError: If Firestore operation fails.
        """
        data: Dict[str, Any] = profile.to_dict()
        data["updatedAt"] = firestore.SERVER_TIMESTAMP

        try:
            doc_ref = self.db.collection(self.COLLECTION_PROFILES).document(user_id)
            await self._maybe_await(doc_ref.set(data))
            logger.info("profile_saved", user_id=user_id)

        except Exception as e:
            logger.error("firestore_profile_save_failed", user_id=user_id, error=str(e))
            raise StorageError(
                message=f"Failed to save profile: {str(e)}",
                details={"user_id": user_id}
            )
