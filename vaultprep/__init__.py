"""
VAULTPREP - Data Vault 2.1 Metadata Preparation

Compiles a user-annotated table inventory into the metadata relations a
Data Vault generator consumes:
1. Source - one registration row per source table
2. Hub - ordered business-key columns per hub
3. Link - hub references per link
4. Satellite - hashdiff member columns per satellite

Version: 1.0.0
Author: VaultPrep Development Team
"""

__version__ = "1.0.0"
__author__ = "VaultPrep Development Team"
