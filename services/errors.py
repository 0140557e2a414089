"""
Failure types for the purge pipeline.
Every PurgeError is turned into {"error": message} with its status code
by the handler registered in main.py.
"""


class PurgeError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ClientInputError(PurgeError):
    status_code = 400


class InvalidContentType(ClientInputError):
    message = "Invalid content type"


class InvalidBody(ClientInputError):
    message = "Invalid JSON body"


class InvalidPayload(ClientInputError):
    message = "Invalid request payload"


class InvalidPurgeType(ClientInputError):
    message = "Invalid purge type"


class UpstreamError(PurgeError):
    status_code = 500


class PayloadEncodeError(UpstreamError):
    message = "Failed to encode payload"


class RequestBuildError(UpstreamError):
    message = "Failed to create request"


class UpstreamSigningError(UpstreamError):
    message = "Failed to sign the request with given credentials"


class UpstreamTransportError(UpstreamError):
    message = "Failed to communicate with Akamai"


class UpstreamDecodeError(UpstreamError):
    message = "Failed to decode Akamai response"


class InvalidURLError(ValueError):
    pass
