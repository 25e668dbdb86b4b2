"""Reconciliation core: model, ports, engine and mirror orchestration."""
