from pathlib import Path

from edgepurge.config import CloudflareConfig, Settings, load_config


def test_load_config_defaults_without_file(tmp_path: Path) -> None:
    assert load_config(None) == Settings()
    assert load_config(str(tmp_path / "missing.yaml")) == Settings()


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    cfg = tmp_path / "edgepurge.yaml"
    cfg.write_text(
        "purge_enabled: false\n"
        "allowed_zones:\n"
        "  - id: z1\n"
        "    name: example.com\n"
        "cloudflare:\n"
        "  purge_batch_size: 10\n",
        encoding="utf-8",
    )
    settings = load_config(str(cfg))
    assert settings.purge_enabled is False
    assert settings.allowed_zones[0].name == "example.com"
    assert settings.allowed_domains == ["example.com"]
    assert settings.cloudflare.purge_batch_size == 10


def test_explicit_domains_are_kept() -> None:
    settings = Settings(
        allowed_zones=[{"id": "z1", "name": "example.com"}],
        allowed_domains=["www.example.com"],
    )
    assert settings.allowed_domains == ["www.example.com"]


def test_env_credentials_fill_gaps(monkeypatch) -> None:
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "from-env")
    monkeypatch.delenv("CLOUDFLARE_EMAIL", raising=False)
    monkeypatch.delenv("CLOUDFLARE_API_KEY", raising=False)
    cfg = CloudflareConfig().with_env_credentials()
    assert cfg.api_token == "from-env"
    assert cfg.has_credentials
    assert CloudflareConfig(api_token="file").with_env_credentials().api_token == "file"
    assert not CloudflareConfig().has_credentials


def test_zone_names_are_normalized() -> None:
    settings = Settings(allowed_zones=[{"id": "z1", "name": " Example.COM. "}])
    assert settings.allowed_zones[0].name == "example.com"
    assert settings.allowed_domains == ["example.com"]
