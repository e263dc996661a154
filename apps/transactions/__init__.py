"""
Transactions App - Cashback Ledger

This app records purchases (which earn cashback) and redemptions (which
spend it), and owns the only code path that changes a customer's balance.

Key Features:
- Geofenced purchase registration (apps.stores.geofence)
- Redemption requests with balance pre-check
- pending -> approved / rejected state machine with terminal states
- Atomic balance updates on approval (row locks + guarded UPDATE)

Architecture:
- Models: Transaction, TransactionType, TransactionStatus
- Services: ledger (state machine), balance (pure arithmetic)
- Views: RESTful API with a ViewSet plus approve/reject actions
- Permissions: managers review, any staff member registers
- Exceptions: domain exception hierarchy with stable error codes
"""
