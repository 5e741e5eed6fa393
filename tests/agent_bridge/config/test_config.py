from agent_bridge.config.airtable import Airtable
from agent_bridge.config.claude import Claude
from agent_bridge.config.loader import load_raw_config
from agent_bridge.config.memory import Memory


def test_load_raw_config_missing_file(tmp_path):
    assert load_raw_config(tmp_path / "nope.toml") == {}


def test_toml_values_override_defaults(tmp_path, monkeypatch):
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        """
[bridge.airtable]
api_key_env = "MY_AIRTABLE_KEY"
log_traffic = true
max_records = 25

[bridge.claude]
model = "claude-test"
max_tokens = 64

[bridge.memory]
path = "/tmp/mem"
collection = "notes"
top_k = 5
"""
    )
    monkeypatch.setenv("MY_AIRTABLE_KEY", "pat-123")
    raw = load_raw_config(cfg)

    airtable = Airtable(raw)
    claude = Claude(raw)
    memory = Memory(raw)

    assert airtable.API_KEY == "pat-123"
    assert airtable.LOG_TRAFFIC is True
    assert airtable.MAX_RECORDS == 25
    assert claude.MODEL_ID == "claude-test"
    assert claude.MAX_TOKENS == 64
    assert memory.PATH == "/tmp/mem"
    assert memory.COLLECTION == "notes"
    assert memory.TOP_K == 5


def test_env_fallbacks_and_defaults(monkeypatch):
    monkeypatch.delenv("AIRTABLE_API_KEY", raising=False)
    monkeypatch.delenv("CLAUDE_MODEL_ID", raising=False)
    monkeypatch.delenv("CLAUDE_BASE_URL", raising=False)
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-test")
    monkeypatch.setenv("MEMORY_TOP_K", "9")

    airtable = Airtable({})
    claude = Claude({})
    memory = Memory({})

    assert airtable.API_KEY is None
    assert airtable.SERVER_NAME == "airtable-mcp-server"
    assert claude.API_KEY == "sk-test"
    assert claude.BASE_URL == "https://api.anthropic.com"
    assert claude.MODEL_ID == "claude-3-5-sonnet-20241022"
    assert claude.MAX_TOKENS == 1000
    assert memory.TOP_K == 9
    assert memory.COLLECTION == "memories"


def test_config_path_honours_env_override(tmp_path, monkeypatch):
    from agent_bridge.config.loader import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH, config_path

    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    assert config_path() == DEFAULT_CONFIG_PATH

    cfg = tmp_path / "bridge.toml"
    cfg.write_text('[bridge.memory]\ncollection = "elsewhere"\n')
    monkeypatch.setenv(CONFIG_PATH_ENV, str(cfg))

    assert config_path() == cfg
    assert Memory(load_raw_config()).COLLECTION == "elsewhere"


def test_section_tolerates_missing_tables():
    from agent_bridge.config.loader import section

    assert section(None, "claude") == {}
    assert section({"other": {}}, "claude") == {}
    assert section({"bridge": {"claude": {"model": "m"}}}, "claude") == {"model": "m"}


def test_package_exports_settings_singletons():
    import agent_bridge.config as config

    assert sorted(config.__all__) == ["airtable", "claude", "memory"]
    assert isinstance(config.airtable, Airtable)
    assert isinstance(config.claude, Claude)
    assert isinstance(config.memory, Memory)
