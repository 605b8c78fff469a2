from pathlib import Path

from .fake_queue import FakeQueueAccess, make_raw_message

test_sqsinspect_str = "testsqsinspect"
temp_dir = Path("temp")
