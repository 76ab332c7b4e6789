# tests/test_policy.py
"""Unit tests for decision document generation."""
import pytest

from appkey_authorizer.policy import generate_policy


class TestGeneratePolicy:
    def test_reference_shape(self):
        assert generate_policy("arn:test:1") == {
            "principalId": 1,
            "policyDocument": {
                "Version": "2012-10-17",
                "Statement": [
                    {"Action": "execute-api:Invoke", "Effect": "Allow", "Resource": "arn:test:1"}
                ],
            },
            "context": {},
        }

    def test_resource_kept_verbatim(self):
        arn = "arn:aws:execute-api:ap-northeast-1:123456789012:abc/prod/GET/ünïcode/*"
        doc = generate_policy(arn)
        assert doc["policyDocument"]["Statement"][0]["Resource"] == arn

    def test_deny(self):
        doc = generate_policy("arn:test:1", effect="Deny")
        assert doc["policyDocument"]["Statement"][0]["Effect"] == "Deny"

    def test_bad_effect(self):
        with pytest.raises(ValueError):
            generate_policy("arn:test:1", effect="Maybe")

    def test_principal_and_context(self):
        context = {"tenant": "acme"}
        doc = generate_policy("arn:test:1", principal_id="svc", context=context)
        assert doc["principalId"] == "svc"
        assert doc["context"] == {"tenant": "acme"}
        assert doc["context"] is not context
