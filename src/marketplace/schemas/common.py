"""Schemas shared by the decision endpoints."""

from pydantic import BaseModel

from src.marketplace.models import Decision


class DecisionRequest(BaseModel):
    """Approve or reject a pending request."""

    decision: Decision
