"""Pydantic Schemas — public API contracts and registry wire shapes.

Invariants:
    - Schemas validate at system boundary (user input, registry responses)
    - Registry field names are mapped in exactly one place (schemas/employee.py)
"""
