from records.settings import DEFAULT_LIMIT, get_client_config, get_server_settings

CLIENT_VARS = [
    "RECORDS_SERVER_URL",
    "RECORDS_BUCKET",
    "RECORDS_COLLECTION",
    "RECORDS_USERNAME",
    "RECORDS_PASSWORD",
    "RECORDS_REQUEST_TIMEOUT",
    "RECORDS_DEFAULT_LIMIT",
    "RECORDS_TICK_INTERVAL",
]


class TestClientConfig:
    def test_defaults(self, monkeypatch):
        for name in CLIENT_VARS:
            monkeypatch.delenv(name, raising=False)
        config = get_client_config()
        assert config.server_url == "http://localhost:8888/v1"
        assert (config.bucket, config.collection) == ("default", "records")
        assert config.credentials is None
        assert config.default_limit == DEFAULT_LIMIT
        assert config.tick_interval == 1.0

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("RECORDS_SERVER_URL", "https://kinto.example.com/v1/")
        monkeypatch.setenv("RECORDS_USERNAME", "alice")
        monkeypatch.setenv("RECORDS_PASSWORD", "s3cret")
        monkeypatch.setenv("RECORDS_DEFAULT_LIMIT", "none")
        monkeypatch.setenv("RECORDS_REQUEST_TIMEOUT", "2.5")
        config = get_client_config()
        assert config.server_url == "https://kinto.example.com/v1"
        assert config.credentials == ("alice", "s3cret")
        assert config.default_limit is None
        assert config.request_timeout == 2.5

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("RECORDS_DEFAULT_LIMIT", "lots")
        monkeypatch.setenv("RECORDS_TICK_INTERVAL", "-1")
        config = get_client_config()
        assert config.default_limit == DEFAULT_LIMIT
        assert config.tick_interval == 1.0


class TestServerSettings:
    def test_defaults(self, monkeypatch):
        for name in ["RECORDS_PAGINATE_BY", "CORS_ALLOW_ORIGINS", "ENABLE_BASIC_AUTH"]:
            monkeypatch.delenv(name, raising=False)
        settings = get_server_settings()
        assert settings.paginate_by is None
        assert settings.cors_allow_origins == ["*"]
        assert settings.enable_basic_auth is False
        assert settings.basic_auth_username is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("RECORDS_PAGINATE_BY", "20")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("ENABLE_BASIC_AUTH", "yes")
        monkeypatch.setenv("BASIC_AUTH_USERNAME", "alice")
        monkeypatch.setenv("BASIC_AUTH_PASSWORD", "s3cret")
        settings = get_server_settings()
        assert settings.paginate_by == 20
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert settings.enable_basic_auth is True
        assert settings.basic_auth_password == "s3cret"
