"""
Wallet Unit Tests
=================
Credential loading and signing; secret material never exposed.
"""

import json

import base58
import pytest
from solders.keypair import Keypair


class TestKeypairCredential:
    """In-memory credential."""

    def test_signs_like_keypair(self, keypair, credential):
        message = b"price update"

        assert credential.pubkey() == keypair.pubkey()
        assert credential.sign_message(message) == keypair.sign_message(message)

    def test_repr_hides_secret(self, keypair, credential):
        text = repr(credential)

        assert str(keypair.pubkey()) in text
        assert base58.b58encode(bytes(keypair)).decode() not in text

    def test_from_base58(self, keypair):
        from feed_updater.execution.wallet import KeypairCredential

        secret = base58.b58encode(bytes(keypair)).decode()

        assert KeypairCredential.from_secret(secret).pubkey() == keypair.pubkey()

    def test_from_json_array(self, keypair):
        from feed_updater.execution.wallet import KeypairCredential

        secret = json.dumps(list(bytes(keypair)))

        assert KeypairCredential.from_secret(secret).pubkey() == keypair.pubkey()

    def test_from_list_and_bytes(self, keypair):
        from feed_updater.execution.wallet import KeypairCredential

        assert KeypairCredential.from_secret(list(bytes(keypair))).pubkey() == keypair.pubkey()
        assert KeypairCredential.from_secret(bytes(keypair)).pubkey() == keypair.pubkey()

    def test_from_file(self, tmp_path, keypair):
        from feed_updater.execution.wallet import KeypairCredential

        path = tmp_path / "id.json"
        path.write_text(json.dumps(list(bytes(keypair))))

        assert KeypairCredential.from_file(path).pubkey() == keypair.pubkey()

    @pytest.mark.parametrize("secret", ["not-base58-0OIl", "[1, 2, 3", "[1, 2, 3]", "abc"])
    def test_invalid_secret(self, secret):
        from feed_updater.execution.wallet import KeypairCredential

        with pytest.raises(ValueError):
            KeypairCredential.from_secret(secret)


class TestLoadCredential:
    """Resolution order and env fallback."""

    def test_explicit_key(self, keypair):
        from feed_updater.execution.wallet import load_credential

        secret = base58.b58encode(bytes(keypair)).decode()

        assert load_credential(private_key=secret).pubkey() == keypair.pubkey()

    def test_key_beats_path(self, tmp_path, keypair):
        from feed_updater.execution.wallet import load_credential

        other = Keypair()
        path = tmp_path / "id.json"
        path.write_text(json.dumps(list(bytes(other))))
        secret = base58.b58encode(bytes(keypair)).decode()

        assert load_credential(private_key=secret, keypair_path=str(path)).pubkey() == keypair.pubkey()

    def test_env_fallback(self, monkeypatch, tmp_path, keypair):
        from feed_updater.execution.wallet import load_credential

        path = tmp_path / "id.json"
        path.write_text(json.dumps(list(bytes(keypair))))
        monkeypatch.setenv("SOLANA_KEYPAIR_PATH", str(path))

        assert load_credential().pubkey() == keypair.pubkey()

    def test_nothing_configured(self):
        from feed_updater.execution.wallet import load_credential

        with pytest.raises(ValueError, match="No signing key configured"):
            load_credential()
