"""Pydantic models for gadget requests and responses."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from gadgets.application.value_objects import GadgetView, SelfDestructResult
from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus


class CreateGadgetRequest(BaseModel):
    """Request body for creating a gadget."""

    name: str = Field(
        ...,
        description="Human-readable gadget name",
        min_length=1,
        max_length=255,
    )


class UpdateGadgetRequest(BaseModel):
    """Request body for a partial gadget update.

    Omitted (or null) fields are left unchanged.
    """

    name: str | None = Field(
        None,
        description="New gadget name",
        max_length=255,
    )
    status: GadgetStatus | None = Field(None, description="New gadget status")

    def to_changes(self) -> GadgetChanges:
        return GadgetChanges(name=self.name, status=self.status)


class GadgetIdPath(BaseModel):
    """Path parameters of routes addressing a single gadget."""

    id: uuid.UUID = Field(..., description="Gadget ID (UUID)")

    @property
    def gadget_id(self) -> GadgetId:
        return GadgetId(value=str(self.id))


class ListGadgetsQuery(BaseModel):
    """Query parameters for listing gadgets."""

    status: GadgetStatus | None = Field(None, description="Only this status")


class GadgetResponse(BaseModel):
    """Response model for a gadget."""

    id: str = Field(..., description="Gadget ID (UUID)")
    name: str = Field(..., description="Gadget name")
    codename: str = Field(..., description="System-generated unique codename")
    status: GadgetStatus = Field(..., description="Lifecycle status")
    decommissioned_at: datetime | None = Field(
        None, description="When the gadget was decommissioned"
    )
    created_at: datetime | None = Field(None, description="When the gadget was created")
    updated_at: datetime | None = Field(None, description="Last modification time")

    @classmethod
    def from_domain(cls, gadget: Gadget) -> GadgetResponse:
        """Convert domain Gadget aggregate to API response."""
        return cls(
            id=gadget.id.value,
            name=gadget.name,
            codename=gadget.codename,
            status=gadget.status,
            decommissioned_at=gadget.decommissioned_at,
            created_at=gadget.created_at,
            updated_at=gadget.updated_at,
        )


class GadgetListItem(GadgetResponse):
    """A listed gadget with its derived success estimate."""

    mission_success_probability: str = Field(
        ...,
        description='Random estimate, "<codename> - <n>% success probability"',
    )

    @classmethod
    def from_view(cls, view: GadgetView) -> GadgetListItem:
        return cls(
            **GadgetResponse.from_domain(view.gadget).model_dump(),
            mission_success_probability=view.mission_success_probability,
        )


class SelfDestructResponse(BaseModel):
    """Response of a self-destruct."""

    gadget: GadgetResponse
    confirmation_code: str = Field(..., description="Six-digit confirmation code")

    @classmethod
    def from_result(cls, result: SelfDestructResult) -> SelfDestructResponse:
        return cls(
            gadget=GadgetResponse.from_domain(result.gadget),
            confirmation_code=result.confirmation_code,
        )
