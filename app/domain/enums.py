"""
Domain enums matching the database enum types.

These enums provide type-safe representations of database enum types
and are used throughout the application for validation and type checking.
"""

from enum import Enum


class TransactionType(str, Enum):
    """Kind of asset movement - matches the transaction_type enum."""

    ISSUE = "ISSUE"  # Asset handed to a custodian
    RETURN = "RETURN"  # Custodian hands the asset back
    TRANSFER = "TRANSFER"  # Asset moves to another custodian or department
    DISPOSAL = "DISPOSAL"  # Asset retired from the inventory
