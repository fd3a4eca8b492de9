"""
Rent Kernel

Record keeping core for residential rent management:
- Tenants, landlords, properties and lease contracts
- Payments grouped by contract (Rent, Utilities, Penalty, Deposit)
- Typed errors, structured logging and an injectable clock
"""

__version__ = "0.1.0"
