from tabnest.core.time.abc import Time
from tabnest.core.time.fake import FakeTime
from tabnest.core.time.real import RealTime

__all__ = ["FakeTime", "RealTime", "Time"]
