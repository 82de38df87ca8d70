"""Schema loading, mode control and the owning FrameBuilder service.

See Also
--------
framescope.builder.frame_builder : the service and its threading model
"""

from .frame_builder import WORK, FrameBuilder
from .mode_controller import ModeController
from .schema_loader import SchemaLoader

__all__ = ["FrameBuilder", "ModeController", "SchemaLoader", "WORK"]
