from fastapi import APIRouter, Depends

from folio.core.services.reference_service import ReferenceText
from folio.dependencies import get_reference
from folio.models.schemas import ReferenceStatusResponse

router = APIRouter()


@router.get("/status", response_model=ReferenceStatusResponse)
def reference_status(reference: ReferenceText = Depends(get_reference)):
    return ReferenceStatusResponse(
        loaded=not reference.is_empty,
        source=reference.source,
        cv_chars=len(reference.cv_text),
        context_chars=len(reference.context_text),
    )
