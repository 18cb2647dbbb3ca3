"""Premium determination services.

Subpackages hold the validation pipeline, pricing strategies, discounts and
underwriting; the orchestrator in ``quote_orchestrator`` wires them together.
"""
