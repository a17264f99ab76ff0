"""
Finality Cache - Slot Confirmation API

GET /isSlotConfirmed/{slot}
    200  slot is finalized
    404  slot is not finalized
    500  the ledger RPC failed
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel

from finality_cache.core.types import MAX_SLOT, ConfirmationStatus
from finality_cache.dependencies import get_resolver
from finality_cache.services.resolver import ConfirmationResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Slots"])


class SlotConfirmation(BaseModel):
    slot: int
    confirmed: bool = True


@router.get(
    "/isSlotConfirmed/{slot}",
    response_model=SlotConfirmation,
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "Slot not confirmed"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Ledger RPC failure"},
    },
)
async def is_slot_confirmed(
    slot: int = Path(..., ge=0, le=MAX_SLOT),
    resolver: ConfirmationResolver = Depends(get_resolver),
) -> SlotConfirmation:
    """Check whether ``slot`` has been finalized, from cache when possible."""
    logger.info(f"Request: /isSlotConfirmed/{slot}")

    result = await resolver.is_confirmed(slot)

    if result is ConfirmationStatus.CONFIRMED:
        return SlotConfirmation(slot=slot)

    if result is ConfirmationStatus.NOT_CONFIRMED:
        raise HTTPException(
            status_code=result.http_status,
            detail="Slot not confirmed",
        )

    logger.error(f"Internal Server Error: upstream failure resolving slot {slot}")
    raise HTTPException(
        status_code=result.http_status,
        detail="Internal server error",
    )
