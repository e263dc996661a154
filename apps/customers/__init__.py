"""
Customers App - Loyalty Program Members

A customer is identified by phone number and created on first interaction.
The cashback balance stored here is only ever changed by the transaction
ledger (``apps.transactions.services.ledger``) when a transaction is approved.
"""
