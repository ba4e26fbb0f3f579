"""
Probe services — the four detection stages.

Each stage is plain functions over paths; no stage persists anything.
"""
