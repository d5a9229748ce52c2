from dataclasses import dataclass, field
from time import time
from typing import Protocol


@dataclass(frozen=True)
class DeviceChanged:
    name: str = "RefreshDevices"
    timestamp: float = field(default_factory=time)


class DeviceNotifier(Protocol):
    def notify_device_changed(self) -> None: ...
