import os

from .loader import section


class Claude:
    def __init__(self, config: dict | None = None) -> None:
        claude_cfg = section(config, "claude")
        key_env = str(claude_cfg.get("api_key_env", "CLAUDE_API_KEY"))

        self.API_KEY: str | None = os.getenv(key_env) or None
        self.BASE_URL: str = str(claude_cfg.get("base_url", os.getenv("CLAUDE_BASE_URL", "https://api.anthropic.com")))
        self.MODEL_ID: str = str(claude_cfg.get("model", os.getenv("CLAUDE_MODEL_ID", "claude-3-5-sonnet-20241022")))
        self.MAX_TOKENS: int = int(claude_cfg.get("max_tokens", os.getenv("CLAUDE_MAX_TOKENS", "1000")))
