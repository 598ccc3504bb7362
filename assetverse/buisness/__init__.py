"""
Business layer
Workflow rules for the asset request lifecycle.

Managers here own validation, state transitions and transaction boundaries;
routes only translate HTTP to calls and domain errors to responses.
"""
