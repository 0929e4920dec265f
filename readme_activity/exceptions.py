class ActivityError(Exception):
    """Base class for everything the updater reports as a failed run."""


class ConfigError(ActivityError):
    pass


class MarkerNotFoundError(ActivityError):
    def __init__(self, marker):
        self.marker = marker
        super().__init__(f"Couldn't find the {marker} comment. Exiting!")


class FetchError(ActivityError):
    pass


class CommitError(ActivityError):
    def __init__(self, args, returncode, output=''):
        self.command = list(args)
        self.returncode = returncode
        self.output = output
        message = f'`{" ".join(self.command)}` exited with status {returncode}'
        if output:
            message += f': {output.strip()}'
        super().__init__(message)
