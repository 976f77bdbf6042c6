"""
Identities known to the stubbed identity provider.
"""

TEST_USER_ID = "5b0c3f0e-9a51-4c47-9f55-0d6c2f6b1a10"
OTHER_USER_ID = "c1f4d2aa-7e0b-4d8e-b2a3-1f9a6e3c5d22"
TEST_TOKENS = {
    "valid-token": {
        "id": TEST_USER_ID,
        "email": "asha@example.com",
        "user_metadata": {"full_name": "Asha Rao"},
    },
    "other-token": {
        "id": OTHER_USER_ID,
        "email": "vikram@example.com",
        "user_metadata": {},
    },
}

# Provider answers 200 with a non-JSON body for this token
MALFORMED_PROVIDER_TOKEN = "gateway-page-token"
