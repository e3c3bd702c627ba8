"""Dependency injection for the gadgets bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gadgets.application.services import GadgetService
from gadgets.infrastructure.codename_generator import WordListCodenameGenerator
from gadgets.infrastructure.gadget_repository import GadgetRepository
from gadgets.ports import CodenameGenerator
from infrastructure.database.dependencies import get_session


def get_gadget_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GadgetRepository:
    """Get GadgetRepository instance.

    Args:
        session: Async database session

    Returns:
        GadgetRepository instance
    """
    return GadgetRepository(session=session)


def get_codename_generator() -> CodenameGenerator:
    """Get the codename generator."""
    return WordListCodenameGenerator()


def get_gadget_service(
    gadget_repository: Annotated[GadgetRepository, Depends(get_gadget_repository)],
    codename_generator: Annotated[CodenameGenerator, Depends(get_codename_generator)],
) -> GadgetService:
    """Get GadgetService instance.

    Args:
        gadget_repository: Gadget repository
        codename_generator: Codename source

    Returns:
        GadgetService instance
    """
    return GadgetService(
        gadget_repository=gadget_repository,
        codename_generator=codename_generator,
    )
