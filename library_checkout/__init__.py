"""Library Checkout - Core Application Package

This package contains the checkout tracker modules including:
- Data models (item.py)
- Catalog store (catalog.py)
- Checkout ledger (ledger.py)
- Late fee rules (fees.py)
- Interactive menu session (session.py)
- CLI interface (main.py)
"""
