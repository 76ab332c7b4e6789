# appkey_authorizer/__init__.py
"""API Gateway REQUEST authorizer for KMS envelope-encrypted application keys."""

__version__ = "0.1.0"
