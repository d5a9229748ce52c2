import uuid

from smarthome.domain.errors import MaintenanceLogNotFoundError
from smarthome.domain.maintenance import MaintenanceLog
from smarthome.ports.repositories import MaintenanceLogRepository


class MaintenanceLogService:
    def __init__(self, repository: MaintenanceLogRepository) -> None:
        self._repository = repository

    def add_log(self, device_id: uuid.UUID, title: str, description: str) -> MaintenanceLog:
        log = MaintenanceLog(device_id=device_id, title=title, description=description)
        self._repository.add(log)
        return log

    def get_logs_for_device(self, device_id: uuid.UUID) -> list[MaintenanceLog]:
        return self._repository.get_for_device(device_id)

    def update_log(self, log_id: uuid.UUID, title: str, description: str) -> MaintenanceLog:
        log = self._repository.get(log_id)
        if log is None:
            raise MaintenanceLogNotFoundError("Log not found.")

        log.title = title
        log.description = description
        self._repository.update(log)
        return log

    def delete_log(self, log_id: uuid.UUID) -> None:
        if self._repository.get(log_id) is None:
            raise MaintenanceLogNotFoundError("Log not found.")
        self._repository.delete(log_id)
