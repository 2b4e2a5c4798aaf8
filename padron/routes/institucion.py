"""
Institution-facing endpoints.

POST /api/institucion/verificar-identidad looks a citizen up by CURP,
INE number or RFC and, when a fingerprint is included, runs the same
biometric comparison as /api/biometria/validar.

GET /api/instituciones lists the partner institutions (API keys are
never returned).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from padron.deps import client_ip, get_matcher, get_store, requesting_institution
from padron.matching import FingerprintMatcher, evaluate
from padron.models.schemas import (
    BiometricResult,
    ErrorResponse,
    IdentifierType,
    IdentityVerificationRequest,
    IdentityVerificationResponse,
    InstitutionPublic,
    RecordSummary,
)
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Institutions"])


@router.post(
    "/api/institucion/verificar-identidad",
    response_model=IdentityVerificationResponse,
    summary="Verify a citizen's identity",
    description=(
        "Search the registry by CURP, INE number or RFC. "
        "If fingerprintData is sent, a biometric comparison is run and logged."
    ),
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def verify_identity(
    body: IdentityVerificationRequest,
    request: Request,
    store: RegistryStore = Depends(get_store),
    matcher: FingerprintMatcher = Depends(get_matcher),
    institution: str = Depends(requesting_institution),
) -> IdentityVerificationResponse:
    lookups = {
        IdentifierType.curp: store.get_record_by_curp,
        IdentifierType.ine: store.get_record_by_ine,
        IdentifierType.rfc: store.get_record_by_rfc,
    }
    record = lookups[body.identifier_type](body.identifier)

    if record is None:
        raise HTTPException(
            status_code=404,
            detail={
                "message": f"{body.identifier_type.value.upper()} not found in electoral registry",
                "found": False,
                "status": "not_found",
            },
        )

    biometric = None
    if body.fingerprint_data:
        outcome = evaluate(matcher, record.fingerprint_data, body.fingerprint_data)
        biometric = BiometricResult(
            matching_percentage=outcome.rounded,
            status=outcome.status,
            threshold=outcome.threshold,
        )
        store.add_validation(
            institution=institution,
            curp=record.curp,
            matching_percentage=outcome.history_percentage,
            status=outcome.status,
            ip_address=client_ip(request),
        )
        logger.info(
            "Identity check (%s) for %s by %s: %.1f%% (%s)",
            body.identifier_type.value, record.curp, institution, outcome.percentage, outcome.status,
        )

    return IdentityVerificationResponse(
        found=True,
        record=RecordSummary.model_validate(record.model_dump()),
        biometric=biometric,
    )


@router.get(
    "/api/instituciones",
    response_model=list[InstitutionPublic],
    summary="List partner institutions",
)
async def list_institutions(store: RegistryStore = Depends(get_store)) -> list[InstitutionPublic]:
    try:
        institutions = store.list_institutions()
    except Exception:
        logger.exception("Failed to list institutions")
        raise HTTPException(status_code=500, detail="Error fetching institutions")
    return [InstitutionPublic.model_validate(i.model_dump()) for i in institutions]
