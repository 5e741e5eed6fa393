"""Bridge configuration"""

import logging
from dotenv import load_dotenv

from .loader import load_raw_config
from .airtable import Airtable
from .claude import Claude
from .memory import Memory

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# basicConfig writes to stderr; stdout belongs to the MCP transport.
logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("httpx").setLevel(logging.WARNING)

_RAW_CONFIG = load_raw_config()

airtable = Airtable(_RAW_CONFIG)
claude = Claude(_RAW_CONFIG)
memory = Memory(_RAW_CONFIG)


__all__ = ["airtable", "claude", "memory"]
