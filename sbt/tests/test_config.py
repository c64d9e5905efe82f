"""
Tests for Settings: derived URLs, network gating and fail-fast validation.
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import json

import pytest

from config import Settings, get_settings
from domain.enums import Cluster
from exceptions import ConfigurationError


def make_settings(**overrides) -> Settings:
    values = {
        "_env_file": None,
        "solana_rpc_url": "",
        "issuer_secret_key": "",
        "issuer_keypair_path": "",
        "sbt_address": "",
        "metadata_uri_override": "",
    }
    values.update(overrides)
    return Settings(**values)


class TestDerivedValues:

    @pytest.mark.unit
    def test_default_rpc_url(self):
        assert make_settings().rpc_url == "https://api.devnet.solana.com"

    @pytest.mark.unit
    def test_rpc_url_override(self):
        assert make_settings(solana_rpc_url="http://localhost:8899").rpc_url == "http://localhost:8899"

    @pytest.mark.unit
    def test_metadata_uri_from_github_pages(self):
        settings = make_settings(github_username="alice", github_repo="assets", metadata_filename="pog.json")
        assert settings.metadata_uri == "https://alice.github.io/assets/metadata/pog.json"
        assert settings.image_url == "https://alice.github.io/assets/images/pog-token.png"

    @pytest.mark.unit
    def test_metadata_uri_override(self):
        settings = make_settings(metadata_uri_override="https://example.com/m.json")
        assert settings.metadata_uri == "https://example.com/m.json"

    @pytest.mark.unit
    def test_explorer_urls(self):
        devnet = make_settings()
        mainnet = make_settings(solana_cluster="mainnet-beta")
        assert devnet.explorer_tx_url("sig") == "https://explorer.solana.com/tx/sig?cluster=devnet"
        assert mainnet.explorer_address_url("addr") == "https://explorer.solana.com/address/addr"

    @pytest.mark.unit
    def test_airdrops_disabled_on_mainnet(self):
        assert make_settings(solana_cluster="devnet").airdrop_enabled is True
        assert make_settings(solana_cluster="mainnet-beta").airdrop_enabled is False
        assert make_settings(solana_cluster="mainnet-beta").solana_cluster is Cluster.MAINNET


class TestValidateTarget:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "   ", "PASTE_YOUR_SBT_ADDRESS_HERE", "<sbt address>", "your_sbt_address"])
    def test_missing_or_placeholder(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            make_settings(sbt_address=value).validate_target()
        assert exc_info.value.field == "SBT_ADDRESS"

    @pytest.mark.unit
    def test_not_base58(self):
        with pytest.raises(ConfigurationError):
            make_settings(sbt_address="not-a-solana-address").validate_target()

    @pytest.mark.unit
    def test_valid_address(self, sample_sbt_address):
        make_settings(sbt_address=sample_sbt_address).validate_target()


class TestIssuerCredential:

    @pytest.mark.unit
    def test_missing_credential(self):
        settings = make_settings()
        assert settings.has_issuer_credential is False
        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_issuer()
        assert exc_info.value.field == "ISSUER_SECRET_KEY"

    @pytest.mark.unit
    def test_secret_key_array(self, issuer_keypair):
        settings = make_settings(issuer_secret_key=json.dumps(list(bytes(issuer_keypair))))
        settings.validate_issuer()
        assert settings.issuer_keypair.pubkey() == issuer_keypair.pubkey()

    @pytest.mark.unit
    def test_keypair_path_takes_precedence(self, issuer_keypair, tmp_path):
        keyfile = tmp_path / "issuer.json"
        keyfile.write_text(json.dumps(list(bytes(issuer_keypair))))
        settings = make_settings(issuer_keypair_path=str(keyfile), issuer_secret_key="garbage")
        assert settings.issuer_keypair.pubkey() == issuer_keypair.pubkey()

    @pytest.mark.unit
    def test_malformed_secret_key(self):
        with pytest.raises(ConfigurationError):
            make_settings(issuer_secret_key="[1, 2, 3]").validate_issuer()


class TestValidateMetadataUri:

    @pytest.mark.unit
    def test_rejects_non_http_uri(self):
        with pytest.raises(ConfigurationError):
            make_settings(metadata_uri_override="ipfs://Qm123").validate_metadata_uri()

    @pytest.mark.unit
    def test_accepts_default(self):
        make_settings().validate_metadata_uri()


class TestGetSettings:
    """Tests for get_settings()."""

    @pytest.fixture(autouse=True)
    def clear_cache(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    @pytest.mark.unit
    def test_invalid_cluster_is_configuration_error(self, monkeypatch):
        monkeypatch.setenv("SOLANA_CLUSTER", "foo")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.field == "SOLANA_CLUSTER"
        assert "Invalid configuration" in exc_info.value.message
        assert exc_info.value.details["invalid_values"][0].startswith("SOLANA_CLUSTER: ")

    @pytest.mark.unit
    def test_failure_is_not_cached(self, monkeypatch):
        monkeypatch.setenv("SOLANA_CLUSTER", "foo")
        with pytest.raises(ConfigurationError):
            get_settings()

        monkeypatch.setenv("SOLANA_CLUSTER", "testnet")
        assert get_settings().solana_cluster is Cluster.TESTNET

    @pytest.mark.unit
    def test_loaded_once(self, monkeypatch):
        monkeypatch.setenv("SOLANA_CLUSTER", "devnet")
        assert get_settings() is get_settings()
