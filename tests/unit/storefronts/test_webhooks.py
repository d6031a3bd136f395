"""Unit tests for webhook authentication and store configuration."""

from __future__ import annotations

import pytest

from modules.storefronts.exceptions import (
    InvalidWebhookSignature,
    MissingWebhookHeaders,
    MissingWebhookSecret,
    StoreNotConfigured,
    UnknownShopDomain,
)
from modules.storefronts.stores import configured_store, store_config, store_for_shop_domain
from modules.storefronts.webhooks import (
    HMAC_HEADER,
    SHOP_DOMAIN_HEADER,
    authenticate_webhook,
    compute_hmac,
    verify_signature,
)

pytestmark = pytest.mark.unit

BODY = b'{"id": 1}'


def _headers(shop="flyscreen-nl.myshopify.com", secret="nl-secret", body=BODY):
    return {HMAC_HEADER: compute_hmac(body, secret), SHOP_DOMAIN_HEADER: shop}


class TestSignature:
    def test_known_vector(self):
        # base64(HMAC-SHA256("secret", "hello"))
        assert compute_hmac(b"hello", "secret") == "iKqz7ejTrflNJquQ07r9SiCDBww7zOnAFO4EpEOEfAs="

    def test_verify(self):
        signature = compute_hmac(BODY, "nl-secret")
        assert verify_signature(BODY, signature, "nl-secret")
        assert not verify_signature(BODY + b" ", signature, "nl-secret")
        assert not verify_signature(BODY, "", "nl-secret")


class TestAuthenticateWebhook:
    def test_valid(self):
        assert authenticate_webhook(_headers(), BODY).key == "nl"

    @pytest.mark.parametrize("missing", [HMAC_HEADER, SHOP_DOMAIN_HEADER])
    def test_missing_headers(self, missing):
        headers = _headers()
        del headers[missing]
        with pytest.raises(MissingWebhookHeaders):
            authenticate_webhook(headers, BODY)

    def test_unknown_shop(self):
        with pytest.raises(UnknownShopDomain):
            authenticate_webhook(_headers(shop="someone-else.myshopify.com"), BODY)

    def test_store_without_secret(self):
        with pytest.raises(MissingWebhookSecret):
            authenticate_webhook(_headers(shop="flyscreen-uk.myshopify.com"), BODY)

    def test_bad_signature(self):
        with pytest.raises(InvalidWebhookSignature):
            authenticate_webhook(_headers(secret="wrong"), BODY)


class TestStores:
    def test_store_config_normalizes_key(self):
        config = store_config(".DE")
        assert config.key == "de"
        assert config.shop == "flyscreen-de.myshopify.com"

    def test_unknown_store(self):
        with pytest.raises(StoreNotConfigured):
            store_config("be")

    def test_configured_store_requires_credentials(self):
        assert configured_store("uk").token == "uk-token"
        with pytest.raises(StoreNotConfigured):
            configured_store("fr")

    def test_empty_shop_domain_never_matches(self):
        assert store_for_shop_domain("") is None
        assert store_for_shop_domain("FLYSCREEN-DE.myshopify.com").key == "de"
