# appkey_authorizer/policy.py
"""IAM policy documents in the shape API Gateway expects from an authorizer.

https://docs.aws.amazon.com/IAM/latest/UserGuide/reference_policies_elements.html
"""
from typing import Any, Dict, Optional, Union

POLICY_VERSION = "2012-10-17"
INVOKE_ACTION = "execute-api:Invoke"
ALLOW = "Allow"
DENY = "Deny"


def generate_policy(
    method_arn: str,
    principal_id: Union[int, str] = 1,
    effect: str = ALLOW,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    if effect not in (ALLOW, DENY):
        raise ValueError(f"effect must be {ALLOW!r} or {DENY!r}, got {effect!r}")
    return {
        "principalId": principal_id,
        "policyDocument": {
            "Version": POLICY_VERSION,
            "Statement": [
                {
                    "Action": INVOKE_ACTION,
                    "Effect": effect,
                    "Resource": method_arn,
                }
            ],
        },
        "context": dict(context or {}),
    }
