"""
Input validation shared by the caller-facing operations.

Dependencies: vaultmind.core.exceptions
System role: Local validation before any gateway call
"""

from typing import Any

from vaultmind.core.exceptions import ValidationError


def validate_vault_id(vault_id: Any) -> int:
    """
    Normalize a vault identifier to a positive integer.

    Accepts integers and decimal strings ("7").

    Args:
        vault_id: Raw vault identifier from the caller

    Returns:
        int: Vault id

    Raises:
        ValidationError: When the identifier is missing or not a positive integer
    """
    if isinstance(vault_id, bool) or vault_id is None:
        raise ValidationError("Valid vaultId is required", field="vault_id")

    if isinstance(vault_id, str):
        vault_id = vault_id.strip()
        # isdigit() also accepts superscripts such as "²", which int() rejects
        if not vault_id.isdecimal():
            raise ValidationError("Valid vaultId is required", field="vault_id")
        vault_id = int(vault_id)

    if not isinstance(vault_id, int) or vault_id <= 0:
        raise ValidationError("Valid vaultId is required", field="vault_id")

    return vault_id
