"""Certificate API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from learnhub.middleware.security import write_route_limit
from learnhub.shared.body import JsonBody, parse_model
from learnhub.shared.dependencies import AppSettings, Store

from .schemas import Certificate, CertificateCreated, CertificateRequest
from .service import CertificateService


router = APIRouter(prefix="/api", tags=["certificates"])


def get_certificate_service(store: Store, settings: AppSettings) -> CertificateService:
    """Get certificate service instance."""
    return CertificateService(store, require_completion=settings.CERTIFICATE_REQUIRES_COMPLETION)


CertificateServiceDep = Annotated[CertificateService, Depends(get_certificate_service)]


@router.post(
    "/courses/{course_id}/certificates",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_route_limit)],
)
async def issue_certificate(course_id: str, body: JsonBody, service: CertificateServiceDep) -> CertificateCreated:
    """Issue a completion certificate for a course."""
    request = parse_model(CertificateRequest, body)
    certificate_id = await service.issue_certificate(course_id, request.user_id, request.score)
    return CertificateCreated(id=certificate_id)


@router.get("/certificates/{user_id}")
async def list_user_certificates(user_id: str, service: CertificateServiceDep) -> list[Certificate]:
    """List the certificates issued to a user."""
    return await service.list_certificates_for_user(user_id)
