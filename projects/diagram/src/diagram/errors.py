"""Exceptions raised while building and rendering diagrams."""


class PlanterError(RuntimeError):
    """Base class for all diagram generation failures."""


class IntegrityError(PlanterError):
    """Raised when a table or column reference cannot be resolved."""


class FilterError(PlanterError):
    """Raised when a table name pattern cannot be compiled."""


class RenderError(PlanterError):
    """Raised when a table or relation fails to render."""


class RasterizeError(PlanterError):
    """Raised when the diagram server cannot convert the diagram text."""
