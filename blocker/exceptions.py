"""Custom exceptions for the Blocker volume driver."""


class BlockerException(Exception):
    """Base exception for Blocker driver errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class VolumeNotFound(BlockerException):
    """Volume name is not registered."""

    pass


class VolumeAlreadyInUse(BlockerException):
    """Volume name is registered and currently mounted."""

    pass


class VolumeAlreadyMounted(BlockerException):
    """Volume is already mounted."""

    pass


class VolumeNotMounted(BlockerException):
    """Volume is registered but not mounted."""

    pass


class MountpointError(BlockerException):
    """Mountpoint directory could not be created or removed."""

    pass


class MountExecFailure(BlockerException):
    """The mount command failed."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class UnmountExecFailure(BlockerException):
    """The umount command failed."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class DeviceExhausted(BlockerException):
    """No free device slot was available for attach."""

    pass


class DeviceMissingAfterAttach(BlockerException):
    """Attach completed but no local device node appeared."""

    pass


class StateTransitionTimeout(BlockerException):
    """Remote volume did not reach the wanted state in time."""

    def __init__(self, message: str, volume_id: str = None, attempts: int = None):
        super().__init__(message)
        self.volume_id = volume_id
        self.attempts = attempts


class StorageServiceError(BlockerException):
    """Storage service returned an unusable response."""

    pass


class HostIdentityError(BlockerException):
    """Instance identity could not be determined."""

    pass
