"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- The dark pool backend is not reachable from a developer machine
- We want to exercise the submit entrypoint end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return outcomes shaped according to src/integrations/contracts/*

Switching to real:
Unset INTEGRATIONS_MODE (or set it to "real") and src/api/main.py wires
clients/real_http/* implementations instead.
"""
