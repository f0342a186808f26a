import os
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ._utils.constants import ENV_BASE_URL, ENV_TIMEOUT


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    timeout: Optional[float] = None
    raise_for_status: bool = False

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Read ``RESTBIND_BASE_URL`` and ``RESTBIND_TIMEOUT``."""
        timeout = os.getenv(ENV_TIMEOUT)
        return cls(
            base_url=os.getenv(ENV_BASE_URL, ""),
            timeout=float(timeout) if timeout else None,
        )
