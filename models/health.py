from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    akamai_host: str
    post_purge_enabled: bool
