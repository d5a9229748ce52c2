class SmartHomeError(Exception):
    pass


class InvalidDeviceError(SmartHomeError, ValueError):
    pass


class InvalidRoomNameError(SmartHomeError, ValueError):
    pass


class RoomNotFoundError(SmartHomeError):
    pass


class UserNotFoundError(SmartHomeError):
    pass


class EmailTakenError(SmartHomeError):
    pass


class MaintenanceLogNotFoundError(SmartHomeError):
    pass
