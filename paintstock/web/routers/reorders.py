"""Reorder API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from paintstock.domain.stock.reorder import ReorderError
from paintstock.services.reorder import UnknownPairError, submit_reorder
from paintstock.web.deps import DBSession
from paintstock.web.schemas import ReorderRequest, TransactionDTO

router = APIRouter()


@router.post("", response_model=TransactionDTO, status_code=status.HTTP_201_CREATED)
def create_reorder(payload: ReorderRequest, db: DBSession) -> TransactionDTO:
    """Submit a reorder as a pending stock_in transaction."""
    try:
        tx = submit_reorder(db, **payload.model_dump())
    except UnknownPairError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ReorderError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return TransactionDTO.model_validate(tx)
