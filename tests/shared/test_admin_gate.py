import pytest
from fastapi import HTTPException
from shared.admin_gate import require_admin


class TestRequireAdmin:
    def test_missing_token(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "secret")
        with pytest.raises(HTTPException) as exc:
            require_admin(None)
        assert exc.value.status_code == 401

    def test_wrong_token(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "secret")
        with pytest.raises(HTTPException) as exc:
            require_admin("guess")
        assert exc.value.status_code == 403

    def test_unconfigured_token_refuses_everyone(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_ADMIN_TOKEN", raising=False)
        with pytest.raises(HTTPException) as exc:
            require_admin("anything")
        assert exc.value.status_code == 403

    def test_matching_token(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "secret")
        assert require_admin("secret") == "admin"

    def test_non_ascii_token_is_denied(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "secret")
        with pytest.raises(HTTPException) as exc:
            require_admin("sécret")
        assert exc.value.status_code == 403

    def test_non_ascii_configured_token(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "clé-secrète")
        assert require_admin("clé-secrète") == "admin"
