"""Per-chain farm lists."""
