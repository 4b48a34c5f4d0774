"""Realized PnL ledger package with FIFO/LIFO lot matching."""
