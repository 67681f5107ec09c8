"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- The dark pool execution backend (batching / MEV-protected submission)
- The x402 payment facilitator (verification of payment headers)

Key rule:
- API routes MUST NOT call external APIs directly.
- Routes should call the submission service, which talks to integration clients
  (under src/integrations/clients).
- We use the MOCK backend during development and the REAL_HTTP backend otherwise.

Switching implementations:
- The selection of mock vs real clients should happen in ONE place (src/api/main.py).
"""
