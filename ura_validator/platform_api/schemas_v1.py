"""Pydantic models for the URA validator v1 API surface."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ThresholdValue = bool | int | float | str


class RequestContext(BaseModel):
    """Per-request correlation fields."""

    request_id: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
    service: str
    timestamp: str
    aiEnabled: bool


class ValidateRequest(BaseModel):
    validationType: str | None = None
    data: Any = None
    ruleSetId: str | None = None
    dataHash: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ProofRecordModel(BaseModel):
    dataHash: str
    proofHash: str
    ruleSetId: str
    timestamp: int


class VerdictModel(BaseModel):
    isValid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    timestamp: int | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    errors: list[str] | None = None


class ValidateResponse(BaseModel):
    requestId: str
    validator: str
    isValid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    timestamp: int | None = None
    ruleSetId: str | None = None
    dataHash: str | None = None
    proofHash: str | None = None
    proof: ProofRecordModel | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    flags: list[str] = Field(default_factory=list)
    errors: list[str] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class BatchValidateRequest(BaseModel):
    requests: list[ValidateRequest] = Field(min_length=1, max_length=100)


class BatchValidateResponse(BaseModel):
    requestId: str
    results: list[VerdictModel]


class RuleSet(BaseModel):
    id: str
    name: str
    description: str
    validationType: str
    parameters: dict[str, ThresholdValue]
    isActive: bool
    createdAt: str
    updatedAt: str


class RuleSetResponse(BaseModel):
    requestId: str
    ruleSet: RuleSet


class RuleSetListResponse(BaseModel):
    requestId: str
    items: list[RuleSet]


class CreateRuleSetRequest(BaseModel):
    id: str = Field(min_length=1, max_length=128)
    name: str = Field(min_length=1)
    description: str = ""
    validationType: str
    parameters: dict[str, ThresholdValue] = Field(default_factory=dict)
    isActive: bool = True


class UpdateRuleSetRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    validationType: str | None = None
    parameters: dict[str, ThresholdValue] | None = None
    isActive: bool | None = None


class DeleteRuleSetResponse(BaseModel):
    requestId: str
    id: str
    deleted: bool


class ValidationTypeInfo(BaseModel):
    type: str
    name: str
    description: str
    defaultRuleSet: str
    capabilities: list[str]


class ValidationTypeListResponse(BaseModel):
    requestId: str
    items: list[ValidationTypeInfo]


class AttestationRequest(BaseModel):
    dataHash: str = Field(min_length=1)
    proofHash: str = Field(min_length=1)
    ruleSetId: str = Field(min_length=1)
    isValid: bool
    metadata: dict[str, Any] = Field(default_factory=dict)


class AttestationResponse(BaseModel):
    requestId: str
    transactionId: str
