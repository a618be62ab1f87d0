"""Business logic for certificate issuance."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from learnhub.exceptions import ResourceNotFoundError, ValidationError
from learnhub.storage import JsonStore

from .schemas import Certificate


logger = logging.getLogger(__name__)


class CertificateService:
    """Service for issuing and listing certificates."""

    def __init__(self, store: JsonStore, require_completion: bool = False) -> None:
        """Initialize certificate service.

        Args:
            store: Backing JSON store
            require_completion: Refuse to issue unless the user's progress
                record for the course is completed
        """
        self.store = store
        self.require_completion = require_completion

    async def issue_certificate(self, course_id: str, user_id: str, score: float | None = None) -> str:
        """Issue a certificate and link it to the user's progress record, if any."""
        async with self.store.transaction() as state:
            course = state.find_course(course_id)
            if course is None:
                raise ResourceNotFoundError("Course", course_id)

            record = state.find_progress(user_id, course_id)
            if self.require_completion and (record is None or not record.completed):
                msg = f"Course {course_id} is not completed by user {user_id}"
                raise ValidationError(msg)

            certificate = Certificate(
                id=str(uuid4()),
                user_id=user_id,
                course_id=course_id,
                course_name=course.title,
                completed_at=datetime.now(UTC),
                score=score,
            )
            state.certificates.append(certificate)
            if record is not None:
                record.certificate_id = certificate.id

        logger.info(f"Issued certificate {certificate.id} for course {course_id} to user {user_id}")
        return certificate.id

    async def list_certificates_for_user(self, user_id: str) -> list[Certificate]:
        """Return the certificates issued to a user in issuance order."""
        return [cert.model_copy() for cert in self.store.state.certificates if cert.user_id == user_id]
