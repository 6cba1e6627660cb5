"""Error types raised by the GitHub transport and config loading."""


class GitHubAPIError(Exception):
    """A GitHub API call failed.

    ``status_code`` is 0 when the request never produced an HTTP response.
    """

    def __init__(self, message: str, status_code: int = 0, endpoint: str = ""):
        super().__init__(message)
        self.status_code = int(status_code)
        self.endpoint = endpoint


class GitHubAuthError(GitHubAPIError):
    pass


class GitHubNotFoundError(GitHubAPIError):
    pass


class GitHubRateLimitError(GitHubAPIError):
    pass


class MalformedResponseError(GitHubAPIError):
    """The API answered, but not with what we asked for."""


class ConfigError(ValueError):
    """A refresh config could not be loaded or validated."""
