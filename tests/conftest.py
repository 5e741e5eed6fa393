import os, sys
from pathlib import Path

# Add src/ to sys.path so tests run without an editable install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Keep real credentials out of the test run
for var in ("AIRTABLE_API_KEY", "CLAUDE_API_KEY", "AIRTABLE_LOG_TRAFFIC", "AGENT_BRIDGE_CONFIG"):
    os.environ.pop(var, None)
