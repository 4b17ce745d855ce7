"""Core Layer: declarations, validators and extraction. No IO, no async.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - config is read only at declaration time (enumeration case, regex message)
    - Everything built here is immutable and safe to share across requests

Design Decisions:
    - pydantic is the validation engine; core wraps it behind Validator so
      declarations never depend on engine types directly
"""
