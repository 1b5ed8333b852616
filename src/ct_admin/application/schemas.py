"""Pydantic schemas for ct_admin API requests/responses."""

from pydantic import BaseModel, Field

from src.ct_response.domain.models import DetectorAuthorization, EmergencyEvent


class EmergencyOverrideRequest(BaseModel):
    enabled: bool
    reason: str = Field(..., min_length=1, max_length=256)


class TokenRequest(BaseModel):
    identity: str = Field(..., min_length=42, max_length=42)


class TokenResponse(BaseModel):
    identity: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class DetectorAuthorizationOut(BaseModel):
    identity: str
    authorized: bool
    updated_by: str
    updated_at: str | None

    @classmethod
    def from_domain(cls, a: DetectorAuthorization) -> "DetectorAuthorizationOut":
        return cls(
            identity=a.identity,
            authorized=a.authorized,
            updated_by=a.updated_by,
            updated_at=a.updated_at.isoformat() if a.updated_at else None,
        )


class DetectorListResponse(BaseModel):
    items: list[DetectorAuthorizationOut]


class EmergencyEventOut(BaseModel):
    id: int
    collection_id: str
    emergency_mode: bool
    trigger: str
    reason: str
    actor: str
    created_at: str | None

    @classmethod
    def from_domain(cls, e: EmergencyEvent) -> "EmergencyEventOut":
        return cls(
            id=e.id,
            collection_id=e.collection_id,
            emergency_mode=e.emergency_mode,
            trigger=e.trigger.value,
            reason=e.reason,
            actor=e.actor,
            created_at=e.created_at.isoformat() if e.created_at else None,
        )


class EmergencyEventListResponse(BaseModel):
    items: list[EmergencyEventOut]
