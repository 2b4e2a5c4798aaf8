"""
POST /api/biometria/validar -- Fingerprint validation against the registry.

Looks the citizen up by CURP, runs the configured matcher on the stored
and provided templates and logs the attempt in the validation history.

DEMO MODE: the matcher is simulated (see padron.matching). The response
contract is the one a real matcher would use.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from padron.deps import client_ip, get_matcher, get_store, requesting_institution
from padron.matching import FingerprintMatcher, evaluate
from padron.models.schemas import (
    BiometricValidationRequest,
    BiometricValidationResponse,
    ErrorResponse,
    RecordSummary,
)
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/biometria/validar",
    response_model=BiometricValidationResponse,
    summary="Validate a fingerprint for a CURP",
    description=(
        "Compares the provided fingerprint template with the one on file for the CURP. "
        "Scores at or above the threshold (85) are a successful match. "
        "Every attempt is written to the validation history."
    ),
    tags=["Biometrics"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def validate_fingerprint(
    body: BiometricValidationRequest,
    request: Request,
    store: RegistryStore = Depends(get_store),
    matcher: FingerprintMatcher = Depends(get_matcher),
    institution: str = Depends(requesting_institution),
) -> BiometricValidationResponse:
    record = store.get_record_by_curp(body.curp)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail={
                "message": "CURP not found in electoral registry",
                "matchingPercentage": 0,
                "status": "not_found",
            },
        )

    outcome = evaluate(matcher, record.fingerprint_data, body.fingerprint_data)

    store.add_validation(
        institution=institution,
        curp=body.curp,
        matching_percentage=outcome.history_percentage,
        status=outcome.status,
        ip_address=client_ip(request),
    )
    logger.info(
        "Validation for %s by %s: %.1f%% (%s)",
        body.curp, institution, outcome.percentage, outcome.status,
    )

    return BiometricValidationResponse(
        matching_percentage=outcome.rounded,
        status=outcome.status,
        threshold=outcome.threshold,
        record=RecordSummary.model_validate(record.model_dump()),
    )
