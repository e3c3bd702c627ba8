"""HTTP routes for the gadget inventory.

Every route requires a valid session cookie. Request validation
dependencies are declared before the caller dependency so that malformed
requests are rejected before the cookie is checked.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from gadgets.application.services import GadgetService
from gadgets.dependencies import get_gadget_service
from gadgets.presentation.models import (
    CreateGadgetRequest,
    GadgetIdPath,
    GadgetListItem,
    GadgetResponse,
    ListGadgetsQuery,
    SelfDestructResponse,
    UpdateGadgetRequest,
)
from iam.application.value_objects import AuthenticatedCaller
from iam.dependencies import get_authenticated_caller
from shared_kernel.responses import SuccessEnvelope
from shared_kernel.validation import RequestRegion, validated

router = APIRouter(
    prefix="/gadgets",
    tags=["gadgets"],
)

Caller = Annotated[AuthenticatedCaller, Depends(get_authenticated_caller)]
Service = Annotated[GadgetService, Depends(get_gadget_service)]
GadgetPath = Annotated[
    GadgetIdPath, Depends(validated(GadgetIdPath, RequestRegion.PATH))
]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_gadget(
    body: Annotated[
        CreateGadgetRequest,
        Depends(validated(CreateGadgetRequest, RequestRegion.BODY)),
    ],
    caller: Caller,
    service: Service,
) -> SuccessEnvelope[GadgetResponse]:
    """Create a gadget with a generated codename and status Available."""
    gadget = await service.create(body.name)
    return SuccessEnvelope[GadgetResponse](
        message="Gadget created successfully.",
        data=GadgetResponse.from_domain(gadget),
    )


@router.get("", status_code=status.HTTP_200_OK)
async def list_gadgets(
    query: Annotated[
        ListGadgetsQuery,
        Depends(validated(ListGadgetsQuery, RequestRegion.QUERY)),
    ],
    caller: Caller,
    service: Service,
) -> SuccessEnvelope[list[GadgetListItem]]:
    """List gadgets, optionally filtered by status.

    Each item carries a freshly randomised ``mission_success_probability``.
    """
    views = await service.list(query.status)
    return SuccessEnvelope[list[GadgetListItem]](
        message="Fetched gadgets list successfully",
        data=[GadgetListItem.from_view(view) for view in views],
    )


@router.patch("/{id}", status_code=status.HTTP_200_OK)
async def update_gadget(
    path: GadgetPath,
    body: Annotated[
        UpdateGadgetRequest,
        Depends(validated(UpdateGadgetRequest, RequestRegion.BODY)),
    ],
    caller: Caller,
    service: Service,
) -> SuccessEnvelope[GadgetResponse]:
    """Partially update a gadget.

    Raises:
        AppError: 404 if the gadget does not exist, 400 if nothing would
            change
    """
    gadget = await service.update(path.gadget_id, body.to_changes())
    return SuccessEnvelope[GadgetResponse](
        message="Gadget updated successfully",
        data=GadgetResponse.from_domain(gadget),
    )


@router.delete("/{id}", status_code=status.HTTP_200_OK)
async def decommission_gadget(
    path: GadgetPath,
    caller: Caller,
    service: Service,
) -> SuccessEnvelope[GadgetResponse]:
    """Decommission a gadget. The record is kept with its timestamp."""
    gadget = await service.decommission(path.gadget_id)
    return SuccessEnvelope[GadgetResponse](
        message="Gadget decommissioned successfully.",
        data=GadgetResponse.from_domain(gadget),
    )


@router.post("/{id}/self-destruct", status_code=status.HTTP_200_OK)
async def self_destruct_gadget(
    path: GadgetPath,
    caller: Caller,
    service: Service,
) -> SuccessEnvelope[SelfDestructResponse]:
    """Destroy a gadget and return a confirmation code."""
    result = await service.self_destruct(path.gadget_id)
    return SuccessEnvelope[SelfDestructResponse](
        message="Gadget self-destruct sequence initiated successfully.",
        data=SelfDestructResponse.from_result(result),
    )
