import os

from .loader import section


def _as_bool(raw) -> bool:
    return str(raw).lower() in ("1", "true", "yes")


class Airtable:
    def __init__(self, config: dict | None = None) -> None:
        airtable_cfg = section(config, "airtable")
        key_env = str(airtable_cfg.get("api_key_env", "AIRTABLE_API_KEY"))

        self.API_KEY: str | None = os.getenv(key_env) or None
        self.SERVER_NAME: str = str(
            airtable_cfg.get("server_name", os.getenv("AIRTABLE_SERVER_NAME", "airtable-mcp-server"))
        )
        self.LOG_TRAFFIC: bool = _as_bool(airtable_cfg.get("log_traffic", os.getenv("AIRTABLE_LOG_TRAFFIC", "0")))
        self.MAX_RECORDS: int = int(airtable_cfg.get("max_records", os.getenv("AIRTABLE_MAX_RECORDS", "100")))
