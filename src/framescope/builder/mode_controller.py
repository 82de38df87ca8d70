from __future__ import annotations

import asyncio

from loguru import logger

from framescope.types import (
    ModeChanged,
    Notification,
    OperationMode,
    TransportProtocol,
    to_operation_mode,
)
from framescope.util import OPERATION_MODE_KEY, Settings

from .schema_loader import SchemaLoader


class ModeController:
    """Holds the operation mode and keeps the transport's delimiters in sync.

    JSON and quick plot streams delimit themselves (JSON object boundaries,
    lines), so those modes clear the start/finish sequences. PROJECT_FILE uses
    the loaded template's delimiters.
    """

    def __init__(
        self,
        loader: SchemaLoader,
        transport: TransportProtocol,
        settings: Settings,
        notif_queue: asyncio.Queue[Notification],
        mode: OperationMode = OperationMode.QUICK_PLOT,
    ):
        self.loader = loader
        self.transport = transport
        self.settings = settings
        self.notif_queue = notif_queue
        self._mode = mode

    @property
    def mode(self) -> OperationMode:
        return self._mode

    def delimiters(self) -> tuple[bytes, bytes]:
        """(start, finish) sequences for the current mode."""
        template = self.loader.template
        if self._mode == OperationMode.PROJECT_FILE and template is not None:
            return template.frame_start, template.frame_end
        return b"", b""

    def set_mode(self, mode: OperationMode | int) -> None:
        """Switch operation mode, push delimiters and persist the choice.

        Re-applying the current mode is allowed and still notifies. Unknown
        values are logged and otherwise ignored.
        """
        new_mode = to_operation_mode(mode)
        if new_mode is None:
            logger.warning("Invalid operation mode selected: {}", mode)
            return

        self._mode = new_mode
        start, finish = self.delimiters()
        self.transport.set_finish_sequence(finish)
        self.transport.set_start_sequence(start)

        self.settings.set_value(OPERATION_MODE_KEY, int(new_mode))
        logger.info("Operation mode set to {}", new_mode.name)
        self.notif_queue.put_nowait(ModeChanged(mode=new_mode))
