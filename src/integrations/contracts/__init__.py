"""
Contracts (data models).

This folder defines the request/response shapes for the dark pool submit
entrypoint and its backend.

Why this exists:
- Ensures consistent data structures across mock and real backend clients
- Keeps the validation rules for caller input in one place
- Makes the proxy safer: the handler relies on stable models, not on ad-hoc dicts

Both mock and real HTTP clients should use these contracts.
"""
