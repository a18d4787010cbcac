"""Error taxonomy shared by the remote collaborators."""


class DashboardError(Exception):
    """Base class for failures surfaced to the dashboard user."""


class ConfigurationError(DashboardError):
    """A required setting is missing."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} is not configured")


class RemoteFetchError(DashboardError):
    """A remote read (catalog, assistant) failed or returned garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class UploadError(DashboardError):
    """Object storage rejected or never received an upload."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
