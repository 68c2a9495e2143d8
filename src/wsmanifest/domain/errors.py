"""Hard failures that make a workspace unusable.

Soft failures (a missing per-project ``package.json``, absent peer
metadata, dangling graph edges) never raise. Everything here propagates
to the service layer, which turns it into a ``ServiceResult`` error.
"""

from __future__ import annotations


class WorkspaceError(Exception):
    """Base class for workspace-level failures.

    Attributes:
        code: Stable error code surfaced in ``ServiceError.code``.
    """

    code = "WORKSPACE_ERROR"


class RootManifestError(WorkspaceError):
    """The workspace root ``package.json`` is missing or malformed."""

    code = "ROOT_MANIFEST_INVALID"


class GraphUnavailableError(WorkspaceError):
    """The project graph could not be loaded."""

    code = "GRAPH_UNAVAILABLE"


class ChangeDetectionError(WorkspaceError):
    """Affected projects could not be computed."""

    code = "CHANGE_DETECTION_FAILED"


class UnknownProjectError(WorkspaceError):
    """A requested project is not a node of the project graph."""

    code = "NOT_FOUND"
