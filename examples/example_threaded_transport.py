# A fake serial port thread feeding quick plot data to the builder's owner loop.
import asyncio
import math
import threading
import time

from framescope.builder import FrameBuilder
from framescope.types import FrameChanged, OperationMode
from framescope.util import LineTransport, Settings, start_log

NUM_CHUNKS = 20

start_log(log_to_file=False, log_to_stdout=True)


def fake_device(builder: FrameBuilder):
    for i in range(NUM_CHUNKS):
        builder.submit(f"{math.sin(i / 3):.3f},{math.cos(i / 3):.3f}".encode())
        time.sleep(0.01)
    builder.stop()


async def main():
    notif_queue = asyncio.Queue()
    builder = FrameBuilder(LineTransport(), Settings(persist=False), notif_queue)
    builder.set_operation_mode(OperationMode.QUICK_PLOT)

    task = asyncio.create_task(builder.run())
    await builder.wait_started()
    threading.Thread(target=fake_device, args=(builder,), daemon=True).start()
    await task

    while not notif_queue.empty():
        notif = notif_queue.get_nowait()
        if isinstance(notif, FrameChanged):
            print([d.value for d in notif.frame.groups[0].datasets])


asyncio.run(main())
