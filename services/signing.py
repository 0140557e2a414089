"""
Request signing for the Akamai API.

Handlers only see the RequestSigner protocol, so tests can swap in a fake
signer without credentials.
"""
import logging
import os
from typing import Protocol

import requests
from akamai.edgegrid import EdgeGridAuth, EdgeRc
from fastapi import Depends

from config import Settings, get_settings
from services.errors import UpstreamSigningError

logger = logging.getLogger(__name__)


class RequestSigner(Protocol):
    def sign(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        ...


class EdgeGridSigner:
    """
    Signs prepared requests with EdgeGrid credentials read from an .edgerc file.
    The file is read again on every call so rotated credentials are picked up.
    """

    def __init__(self, edgerc_path: str, section: str = "default"):
        self.edgerc_path = os.path.expanduser(edgerc_path)
        self.section = section

    def sign(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        try:
            auth = EdgeGridAuth.from_edgerc(EdgeRc(self.edgerc_path), self.section)
            return auth(request)
        except Exception as e:
            logger.error(
                "Failed to sign the request with credentials from %s [%s]: %s",
                self.edgerc_path, self.section, e,
            )
            raise UpstreamSigningError() from e


def get_signer(settings: Settings = Depends(get_settings)) -> RequestSigner:
    return EdgeGridSigner(settings.akamai_edgerc_path, settings.akamai_edgerc_section)
