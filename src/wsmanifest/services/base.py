"""BaseService: shared foundation for wsmanifest services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wsmanifest.domain.errors import WorkspaceError
from wsmanifest.services.result import ServiceResult

if TYPE_CHECKING:
    from wsmanifest.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Every service receives a :class:`Workspace`; all graph, manifest and
    metadata access goes through it.
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _error_result(op: str, exc: WorkspaceError) -> ServiceResult:
        """Convert a hard workspace failure into an error result."""
        logger.debug("%s failed: %s", op, exc, exc_info=True)
        return ServiceResult.failure(op, exc.code, str(exc))
