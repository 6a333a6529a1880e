"""
Ledger - Registry arithmetic mirrored from the contract.

- constants: prices and periods
- pricing:   registration price, refunds, burn rewards
- lifecycle: registration and inbox windows
"""
