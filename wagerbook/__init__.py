"""
Wager Book - personal wager ledger and payout calculator.
"""
__version__ = "1.0.0"
