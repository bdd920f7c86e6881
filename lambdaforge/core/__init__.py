"""Deployment core: spec and history stores, version resolution, orchestration."""
