import asyncio
import pathlib

from framescope.builder import FrameBuilder
from framescope.decoder import SeparatorFrameParser
from framescope.types import FrameChanged, OperationMode
from framescope.util import LineTransport, Settings, start_log

HERE = pathlib.Path(__file__).parent

start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")

notif_queue = asyncio.Queue()
transport = LineTransport()
builder = FrameBuilder(transport, Settings(persist=False), notif_queue)
builder.set_frame_parser(SeparatorFrameParser(","))
builder.load_json_map(str(HERE / "weather_station.json"))
builder.set_operation_mode(OperationMode.PROJECT_FILE)  # pushes "$" / ";"

for line in [b"$21.5,40,270,3.2;", b"$21.7,41,265,4.0;", b"$22.0;"]:
    builder.read_data(transport.extract(line))

while not notif_queue.empty():
    notif = notif_queue.get_nowait()
    if isinstance(notif, FrameChanged):
        for group in notif.frame.groups:
            print(group.title, [(d.title, d.value, d.units) for d in group.datasets])
