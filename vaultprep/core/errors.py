"""
VAULTPREP Exceptions

Incomplete annotation is never an error: compilers leave it out of their
output and record an Omission. These exceptions cover input the compiler
cannot interpret at all.
"""

from typing import List, Optional


class VaultPrepError(Exception):
    """Base exception for VaultPrep."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class DuplicateHashkeyError(VaultPrepError):
    """A hashkey name is claimed by more than one business-key group.

    Link and hashdiff resolution look hashkeys up by name across all tables,
    so a duplicated name has no single owner.
    """

    def __init__(self, hashkey_name: str, owners: List[str]):
        self.hashkey_name = hashkey_name
        self.owners = owners
        super().__init__(
            f"Hashkey '{hashkey_name}' is defined by more than one business key group",
            details=", ".join(owners),
        )


class MetadataLoadError(VaultPrepError):
    """An annotation snapshot could not be read or validated."""
