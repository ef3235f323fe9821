"""Service-level errors mapped to HTTP status codes by the API layer."""


class BucketPullError(Exception):
    """Base error carrying the HTTP status the API should answer with."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(BucketPullError):
    status_code = 404


class VideoNotFoundError(NotFoundError):
    pass


class InvalidVideoError(BucketPullError):
    status_code = 400


class EpisodeNumberError(BucketPullError):
    status_code = 400


class DuplicateEpisodeError(BucketPullError):
    status_code = 409


class InvalidTimestampError(BucketPullError):
    status_code = 422


class UpstreamServiceError(BucketPullError):
    """A video platform, transcript or completion call failed."""

    status_code = 502

    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service


class AuthenticationError(BucketPullError):
    status_code = 401


class AuthorizationError(BucketPullError):
    status_code = 403
