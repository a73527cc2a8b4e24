"""
Constants shared across the Liquid wallet CLI.
"""

from __future__ import annotations

# Elements regtest native asset used by the local development node
REGTEST_POLICY_ASSET = "0f82e3be4e0644251bccfc1281249d5fa77bc67bb3d32af2025b4a3c3a0eb9c8"

# Local waterfalls indexer
DEFAULT_ESPLORA_URL = "http://127.0.0.1:3102/"

DEFAULT_DATA_DIR_NAME = "wallet_data"
DEFAULT_MNEMONIC_FILE = "mnemonic.txt"
CONFIG_FILE_NAME = "config.toml"

VALID_WORD_COUNTS = (12, 15, 18, 21, 24)

# Reissuance tokens minted alongside every new issuance
ISSUANCE_TOKEN_AMOUNT = 1

# Chain scans always start from the first derivation index
SCAN_START_INDEX = 0
