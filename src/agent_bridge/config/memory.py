import os

from .loader import section


class Memory:
    def __init__(self, config: dict | None = None) -> None:
        memory_cfg = section(config, "memory")
        self.PATH: str = str(memory_cfg.get("path", os.getenv("MEMORY_PATH", "./vector_store")))
        self.COLLECTION: str = str(memory_cfg.get("collection", os.getenv("MEMORY_COLLECTION", "memories")))
        self.TOP_K: int = int(memory_cfg.get("top_k", os.getenv("MEMORY_TOP_K", "3")))
