"""Account DRF serializer for API output.

Fields come from ``ACCOUNT_POLICY``; the password never appears here.
"""

from __future__ import annotations

from modules.accounts.policy import ACCOUNT_POLICY
from modules.core.serializers import PolicySerializer


class AccountSerializer(PolicySerializer):
    policy = ACCOUNT_POLICY
