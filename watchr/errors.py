class ConfigError(Exception):
    """Invalid flag combination or unusable config file."""


class WatchError(Exception):
    """A failure that ends a watch task, and with it the process."""


class StatError(WatchError):
    """The watched path's metadata could not be read."""


class CommandError(WatchError):
    def __init__(self, command: str, message: str, returncode=None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
