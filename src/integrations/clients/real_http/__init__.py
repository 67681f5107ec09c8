"""
Real HTTP integration clients.

These clients communicate with real external systems via HTTP, e.g.:
- the dark pool execution backend (POST /submit)

Important:
- Must implement the same interface as the mock clients
- Must return outcomes shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients should happen in src/api/main.py only.
"""
