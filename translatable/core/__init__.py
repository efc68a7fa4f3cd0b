"""
Translation engine core

codec      column-key encoding of (field, locale)
locales    target locale resolution
selection  translatable field selection
collector  schema materialization with memoization and re-entrancy guard
cache      process-wide collector state
schema     SQLAlchemy schema registry
storage    type tags, storage kinds and rich-text column types
engine     wiring and model registration
"""
