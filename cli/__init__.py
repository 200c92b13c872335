"""Command-line driver for zk-treecopy."""
