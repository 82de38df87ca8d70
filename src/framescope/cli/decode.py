import asyncio

import click
import simplejson as json
from click_option_group import optgroup
from loguru import logger

from framescope.builder import FrameBuilder
from framescope.decoder import SeparatorFrameParser
from framescope.types import DecoderMethod, FrameChanged, OperationMode, SchemaError
from framescope.util import (
    DEFAULT_LOGLEVEL,
    LineTransport,
    Settings,
    StaticPlayback,
    shutdown_log,
    start_log,
)

from .base import ClickMessageSink

MODES = {
    "project": OperationMode.PROJECT_FILE,
    "json": OperationMode.DEVICE_SENDS_JSON,
    "quickplot": OperationMode.QUICK_PLOT,
}
DECODERS = {
    "plain": DecoderMethod.PLAIN_TEXT,
    "hex": DecoderMethod.HEXADECIMAL,
    "base64": DecoderMethod.BASE64,
}


def _validate_separator(ctx, param, value):
    if not value:
        raise click.BadParameter("must not be empty")
    return value


def echo_frames(notif_queue: asyncio.Queue) -> int:
    """Print every FrameChanged waiting on the queue as a JSON line."""
    count = 0
    while not notif_queue.empty():
        notif = notif_queue.get_nowait()
        if isinstance(notif, FrameChanged):
            click.echo(json.dumps(notif.frame.to_dict()))
            count += 1
    return count


@click.command(name="decode")
@click.argument("input_file", type=click.File("rb"), default="-")
@optgroup.group("Decoding Options")
@optgroup.option(
    "--mode",
    "-m",
    type=click.Choice(list(MODES)),
    default="quickplot",
    help="Operation mode (default: quickplot)",
)
@optgroup.option(
    "--schema",
    "-s",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON map to load (required for project mode)",
)
@optgroup.option(
    "--decoder",
    "-d",
    type=click.Choice(list(DECODERS)),
    default="plain",
    help="Bytes to text conversion in project mode (default: plain)",
)
@optgroup.option(
    "--separator",
    default=",",
    callback=_validate_separator,
    help="Field separator used by the frame parser in project mode",
)
@optgroup.option(
    "--replay",
    is_flag=True,
    default=False,
    help="Treat input as recorded CSV values (bypasses the frame parser)",
)
@optgroup.group("Logging Options")
@optgroup.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable logging to file (default: disabled)",
)
@optgroup.option(
    "--log-to-stdout/--no-log-to-stdout",
    default=False,
    help="Enable/disable console logging (default: disabled)",
)
@optgroup.option("--log-path", "-lp", default="", help="Custom path for log file")
@optgroup.option(
    "--log-level",
    "-ll",
    default=DEFAULT_LOGLEVEL,
    help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR) (default: INFO)",
)
@click.option(
    "--persist/--no-persist",
    default=False,
    help="Save the mode and JSON map location to the settings file",
)
@click.pass_context
def decode(
    ctx,
    input_file,
    mode: str,
    schema: str | None,
    decoder: str,
    separator: str,
    replay: bool,
    log_to_file: bool,
    log_to_stdout: bool,
    log_path: str,
    log_level: str,
    persist: bool,
):
    """Decode newline delimited chunks from INPUT_FILE (default: stdin).

    Each decoded frame is printed as one JSON object per line.

    Usage
    `framescope decode -m project -s project.json capture.txt`
    """
    if MODES[mode] == OperationMode.PROJECT_FILE and not schema:
        raise click.UsageError("--schema is required in project mode")

    start_log(
        log_to_file=log_to_file,
        log_to_stdout=log_to_stdout,
        log_path=log_path,
        log_level=log_level,
    )
    notif_queue = asyncio.Queue()
    transport = LineTransport()
    builder = FrameBuilder(
        transport,
        Settings(persist=persist),
        notif_queue,
        playback=StaticPlayback(replay),
        message_sink=ClickMessageSink(),
        decoder_method=DECODERS[decoder],
    )
    builder.set_frame_parser(SeparatorFrameParser(separator))

    try:
        if schema:
            try:
                builder.load_json_map(schema)
            except SchemaError:
                ctx.exit(1)
        builder.set_operation_mode(MODES[mode])

        count = 0
        for chunk in transport.chunks(input_file):
            builder.read_data(chunk)
            count += echo_frames(notif_queue)
        logger.info("Decoded {} frames", count)
    finally:
        shutdown_log()
